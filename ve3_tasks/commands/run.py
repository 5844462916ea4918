"""Execute one or more registered scripts."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
from argparse import ArgumentParser, Namespace, _SubParsersAction

from ve3_tasks.commands.base import register
from ve3_tasks.config import load_registry, locate_config
from ve3_tasks.runner import ScriptRunner
from ve3_tasks.runtime import EXIT_CODES
from ve3_tasks.runtime.environment import load_overrides

LOGGER = logging.getLogger(__name__)


def build_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("run", help="Run registered scripts by name")
    parser.set_defaults(command="run", handler=handle)
    parser.add_argument(
        "names",
        nargs="+",
        metavar="NAME",
        help="Script name(s), e.g. 'schema.asset-gauge'. Several names run in order.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the shell commands that would run without spawning them.",
    )


@register("run")
def handle(args: Namespace) -> int:
    cwd = getattr(args, "cwd", None)
    registry = load_registry(locate_config(getattr(args, "config", None), cwd))
    overrides = load_overrides(getattr(args, "env_file", None), cwd)
    runner = ScriptRunner(
        registry,
        cwd=cwd,
        env=overrides.variables if overrides is not None else None,
        dry_run=bool(getattr(args, "dry_run", False)),
    )
    if overrides is not None and runner.dry_run:
        LOGGER.info("[dry-run] environment overrides from %s", overrides.describe())

    result = runner.run_many(args.names)
    LOGGER.info(
        "%s finished: %d command(s) %s.",
        " ".join(result.requested),
        len(result.executed),
        "planned" if result.dry_run else "executed",
    )
    return EXIT_CODES["success"]
