"""Task runner for the ve3 contract workspace.

Named scripts are declared in ``package-scripts.yml`` and executed through
:mod:`ve3_tasks.cli`.  Registry, runner and runtime helpers are re-exported
here for programmatic use; importing the package has no side-effects.
"""

# SPDX-License-Identifier: MIT

from .commands import (  # noqa: F401 - re-export for convenience
    ChildProcessFailure,
    CommandError,
    ConfigError,
    RegistryError,
    UnknownCommand,
)
from .config import load_registry  # noqa: F401
from .registry import CommandEntry, CommandRegistry, CompositeCommand  # noqa: F401
from .runner import ScriptRunner, ScriptRunResult  # noqa: F401

__all__ = [
    "ChildProcessFailure",
    "CommandEntry",
    "CommandError",
    "CommandRegistry",
    "CompositeCommand",
    "ConfigError",
    "RegistryError",
    "ScriptRunResult",
    "ScriptRunner",
    "UnknownCommand",
    "load_registry",
]
