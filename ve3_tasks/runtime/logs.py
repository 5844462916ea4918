"""Log output for task runs: one line per record on stderr, stamped in UTC."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
import sys
import time
from typing import IO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class UTCFormatter(logging.Formatter):
    """ISO-8601 timestamps with millisecond precision and an explicit UTC offset."""

    converter = time.gmtime
    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03d+00:00"


def configure_logging(level: int, stream: IO[str] | None = None) -> logging.Handler:
    """Route every task-runner record to *stream* (stderr by default).

    Child processes write to the inherited stdout/stderr directly, so keeping
    runner output on stderr leaves a command's own stdout untouched for pipes.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(UTCFormatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def level_from_flags(verbose: int, quiet: int) -> int:
    """INFO, moved one step per ``-v`` (down) or ``-q`` (up), within DEBUG..CRITICAL."""

    level = logging.INFO - (verbose * 10) + (quiet * 10)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


__all__ = ["LOG_FORMAT", "UTCFormatter", "configure_logging", "level_from_flags"]
