"""List the scripts known to the registry."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import sys
from argparse import ArgumentParser, Namespace, _SubParsersAction
from typing import IO

from ve3_tasks.commands.base import register
from ve3_tasks.config import load_registry, locate_config
from ve3_tasks.registry import CommandEntry, CommandRegistry
from ve3_tasks.runtime import EXIT_CODES


def build_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("list", help="List available scripts")
    parser.set_defaults(command="list", handler=handle)
    parser.add_argument(
        "--verbose",
        dest="show_commands",
        action="store_true",
        help="Show the shell command(s) behind every script.",
    )


def render(registry: CommandRegistry, *, show_commands: bool = False) -> list[str]:
    lines: list[str] = []
    width = max((len(name) for name in registry), default=0)
    for name in sorted(registry):
        entry = registry[name]
        if isinstance(entry, CommandEntry):
            summary = entry.description or entry.invocation
        else:
            summary = entry.description or "runs " + ", ".join(entry.steps)
        lines.append(f"{name.ljust(width)}  {summary}")
        if show_commands:
            lines.extend(f"{'':{width}}    $ {step.invocation}" for step in registry.expand(name))
    return lines


@register("list")
def handle(args: Namespace, stream: IO[str] | None = None) -> int:
    out = stream or sys.stdout
    registry = load_registry(locate_config(getattr(args, "config", None), getattr(args, "cwd", None)))
    for line in render(registry, show_commands=bool(getattr(args, "show_commands", False))):
        out.write(line + "\n")
    return EXIT_CODES["success"]
