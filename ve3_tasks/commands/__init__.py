"""Command implementations for the task runner CLI."""

from __future__ import annotations

# SPDX-License-Identifier: MIT
from .base import (
    ChildProcessFailure,
    CommandError,
    ConfigError,
    RegistryError,
    UnknownCommand,
    register,
)

__all__ = [
    "ChildProcessFailure",
    "CommandError",
    "ConfigError",
    "RegistryError",
    "UnknownCommand",
    "register",
]
