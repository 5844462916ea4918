"""Common helper utilities shared between CLI commands."""
from __future__ import annotations

# SPDX-License-Identifier: MIT
import argparse
import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Mapping, MutableMapping

from ve3_tasks.runtime import EXIT_CODES

LOGGER = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised when a command cannot be executed successfully."""

    exit_code: int = EXIT_CODES["internal_error"]


class UnknownCommand(CommandError):
    """Raised when a name is not present in the registry."""

    exit_code = EXIT_CODES["command_not_found"]

    def __init__(self, name: str) -> None:
        super().__init__(f"Command not found: '{name}'")
        self.name = name


class ChildProcessFailure(CommandError):
    """Raised when an invoked subprocess exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, detail: str | None = None) -> None:
        if detail:
            message = f"Command '{command}' failed: {detail}"
        else:
            message = f"Command '{command}' exited with status {returncode}."
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.exit_code = returncode


class RegistryError(CommandError):
    """Raised when the script definitions are inconsistent."""

    exit_code = EXIT_CODES["config_error"]


class ConfigError(CommandError):
    """Raised when the configuration file cannot be loaded."""

    exit_code = EXIT_CODES["config_error"]


_REGISTRY: MutableMapping[str, Callable[[argparse.Namespace], int]] = {}


def register(
    name: str,
) -> Callable[[Callable[[argparse.Namespace], int]], Callable[[argparse.Namespace], int]]:
    """Decorator used by subcommand modules to expose their handlers."""

    def decorator(func: Callable[[argparse.Namespace], int]) -> Callable[[argparse.Namespace], int]:
        _REGISTRY[name] = func
        return func

    return decorator


def get_handler(name: str) -> Callable[[argparse.Namespace], int]:
    try:
        return _REGISTRY[name]
    except KeyError as exc:  # pragma: no cover - argparse rejects unknown subcommands
        raise CommandError(f"Unknown subcommand '{name}'") from exc


def run_shell(
    invocation: str,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """Execute *invocation* through the system shell exactly as written.

    The child shares the parent's process group, so a terminal interrupt
    reaches both; :func:`subprocess.run` kills the child if the parent is
    interrupted first.  :class:`OSError` propagates when the shell cannot
    be started, e.g. because *cwd* does not exist.
    """

    LOGGER.debug("Executing shell command: %s", invocation)
    combined_env = None
    if env:
        combined_env = {**os.environ, **dict(env)}

    result = subprocess.run(
        invocation,
        shell=True,
        cwd=str(cwd) if cwd else None,
        env=combined_env,
        check=False,
    )
    LOGGER.debug("Shell command finished with status %s", result.returncode)
    return result


__all__ = [
    "ChildProcessFailure",
    "CommandError",
    "ConfigError",
    "RegistryError",
    "UnknownCommand",
    "get_handler",
    "register",
    "run_shell",
]
