"""Task runner for the ve3 contract workspace."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import argparse
import logging
from pathlib import Path
from typing import Sequence

from ve3_tasks.commands import CommandError
from ve3_tasks.commands import base as command_base
from ve3_tasks.runtime import EXIT_CODES, configure_logging, level_from_flags

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ve3-tasks", description=__doc__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be provided multiple times).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease log verbosity (can be provided multiple times).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Variables for spawned scripts. Defaults to .env in the --cwd directory.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Script definitions file. Defaults to $VE3_TASKS_CONFIG, ./package-scripts.yml, "
        "then the bundled definitions.",
    )
    parser.add_argument(
        "--cwd",
        type=Path,
        default=None,
        help="Working directory for spawned commands.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    from ve3_tasks.commands import listing, run

    run.build_parser(subparsers)
    listing.build_parser(subparsers)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(level_from_flags(args.verbose, args.quiet))
    handler = command_base.get_handler(args.command)

    try:
        return handler(args)
    except CommandError as exc:
        LOGGER.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        LOGGER.error("Interrupted.")
        return EXIT_CODES["interrupted"]


if __name__ == "__main__":  # pragma: no cover - exercised by CLI
    raise SystemExit(main())
