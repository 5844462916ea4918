"""Runtime helpers for the task runner: logging and exit codes.

Environment overrides live in :mod:`ve3_tasks.runtime.environment`, which is
imported directly because it depends on the command error types.
"""

from __future__ import annotations

# SPDX-License-Identifier: MIT
from .exit_codes import EXIT_CODES, normalise_returncode
from .logs import UTCFormatter, configure_logging, level_from_flags

__all__ = [
    "EXIT_CODES",
    "UTCFormatter",
    "configure_logging",
    "level_from_flags",
    "normalise_returncode",
]
