# SPDX-License-Identifier: MIT
"""Sequential execution of registered scripts.

Every shell entry runs as one child process and blocks until it exits.
Composite commands run their steps in declared order and stop at the first
non-zero exit status, which becomes the overall result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from ve3_tasks.commands.base import ChildProcessFailure, run_shell
from ve3_tasks.registry import CommandEntry, CommandRegistry
from ve3_tasks.runtime import EXIT_CODES, normalise_returncode

__all__ = ["ScriptRunResult", "ScriptRunner"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScriptRunResult:
    """Outcome of a successful run."""

    requested: tuple[str, ...]
    executed: list[CommandEntry] = field(default_factory=list)
    dry_run: bool = False
    exit_code: int = EXIT_CODES["success"]


class ScriptRunner:
    """Run entries from a :class:`CommandRegistry` one at a time."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        dry_run: bool = False,
    ) -> None:
        self.registry = registry
        self.cwd = cwd
        self.env = env
        self.dry_run = dry_run

    def run(self, name: str) -> ScriptRunResult:
        return self.run_many([name])

    def run_many(self, names: Sequence[str]) -> ScriptRunResult:
        """Run each of *names* in order, stopping at the first failure.

        All names are resolved before any process is spawned, so an unknown
        name raises :class:`UnknownCommand` without side-effects.
        """

        plan: list[CommandEntry] = []
        for name in names:
            plan.extend(self.registry.expand(name))

        result = ScriptRunResult(requested=tuple(names), dry_run=self.dry_run)
        for entry in plan:
            if self.dry_run:
                LOGGER.info("[dry-run] %s: %s", entry.name, entry.invocation)
                result.executed.append(entry)
                continue
            self._execute(entry)
            result.executed.append(entry)
        return result

    def _execute(self, entry: CommandEntry) -> None:
        LOGGER.info("Running %s: %s", entry.name, entry.invocation)
        try:
            completed = run_shell(entry.invocation, cwd=self.cwd, env=self.env)
        except OSError as exc:
            raise ChildProcessFailure(
                entry.name, EXIT_CODES["missing_resource"], f"Unable to start process: {exc}"
            ) from exc
        if completed.returncode != 0:
            raise ChildProcessFailure(entry.name, normalise_returncode(completed.returncode))
        LOGGER.debug("%s completed successfully", entry.name)
