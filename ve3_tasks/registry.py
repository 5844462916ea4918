# SPDX-License-Identifier: MIT
"""Immutable registry of named scripts.

Scripts are declared as a nested mapping where nested keys are joined with
``.`` to form the command name.  A leaf is either a shell command string, a
``{"script": ..., "description": ...}`` mapping, or a
``{"sequence": [...], "description": ...}`` mapping describing a composite
command that runs other registered names in order.  A key called ``default``
makes its group reachable by the bare group name, so ``schema`` resolves to
``schema.default``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from ve3_tasks.commands.base import RegistryError, UnknownCommand

__all__ = [
    "CommandEntry",
    "CommandRegistry",
    "CompositeCommand",
    "DEFAULT_KEY",
    "RegistryItem",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_KEY = "default"
_SCRIPT_KEY = "script"
_SEQUENCE_KEY = "sequence"
_DESCRIPTION_KEY = "description"


@dataclass(frozen=True, slots=True)
class CommandEntry:
    """A named shell invocation passed to the shell verbatim."""

    name: str
    invocation: str
    description: str = ""

    def __post_init__(self) -> None:  # type: ignore[override]
        if not self.name:
            raise RegistryError("CommandEntry.name must be non-empty")
        if not isinstance(self.invocation, str) or not self.invocation.strip():
            raise RegistryError(f"Command '{self.name}' has an empty invocation")


@dataclass(frozen=True, slots=True)
class CompositeCommand:
    """A named, ordered sequence of other registered commands."""

    name: str
    steps: tuple[str, ...]
    description: str = ""

    def __post_init__(self) -> None:  # type: ignore[override]
        if not self.name:
            raise RegistryError("CompositeCommand.name must be non-empty")
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise RegistryError(f"Composite command '{self.name}' lists no steps")
        for step in self.steps:
            if not isinstance(step, str) or not step:
                raise RegistryError(
                    f"Composite command '{self.name}' contains an invalid step: {step!r}"
                )


RegistryItem = CommandEntry | CompositeCommand


class CommandRegistry(Mapping[str, RegistryItem]):
    """Read-only mapping from command name to its definition.

    The registry validates on construction that every composite step refers
    to a registered name and that composites do not reference themselves
    through any chain of steps.  Once built it cannot be modified.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[RegistryItem]) -> None:
        collected: dict[str, RegistryItem] = {}
        for entry in entries:
            if entry.name in collected:
                raise RegistryError(f"Duplicate command name '{entry.name}'")
            collected[entry.name] = entry
        self._entries: Mapping[str, RegistryItem] = MappingProxyType(collected)
        self._validate()
        LOGGER.debug("Command registry initialised with %d entries", len(collected))

    @classmethod
    def from_mapping(cls, scripts: Mapping[str, Any]) -> "CommandRegistry":
        """Flatten a nested script definition into a registry."""

        if not isinstance(scripts, Mapping):
            raise RegistryError("Script definitions must be a mapping of names")
        entries = list(_flatten(scripts, prefix=""))
        if not entries:
            raise RegistryError("Script definitions do not define any commands")
        return cls(entries)

    def __getitem__(self, name: str) -> RegistryItem:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CommandRegistry({list(self._entries)!r})"

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def resolve(self, name: str) -> RegistryItem:
        """Return the entry for *name*, falling back to ``<name>.default``."""

        entry = self._lookup(name)
        if entry is None:
            raise UnknownCommand(name)
        return entry

    def expand(self, name: str) -> list[CommandEntry]:
        """Return the shell entries *name* would execute, in order."""

        entry = self.resolve(name)
        if isinstance(entry, CommandEntry):
            return [entry]
        expanded: list[CommandEntry] = []
        for step in entry.steps:
            expanded.extend(self.expand(step))
        return expanded

    def _lookup(self, name: str) -> RegistryItem | None:
        entry = self._entries.get(name)
        if entry is None and name:
            entry = self._entries.get(f"{name}.{DEFAULT_KEY}")
        return entry

    def _validate(self) -> None:
        for entry in self._entries.values():
            if not isinstance(entry, CompositeCommand):
                continue
            missing = [step for step in entry.steps if self._lookup(step) is None]
            if missing:
                raise RegistryError(
                    f"Composite command '{entry.name}' references unknown command(s): "
                    + ", ".join(missing)
                )
        for entry in self._entries.values():
            if isinstance(entry, CompositeCommand):
                self._check_cycles(entry, trail=())

    def _check_cycles(self, entry: CompositeCommand, trail: tuple[str, ...]) -> None:
        if entry.name in trail:
            chain = " -> ".join((*trail, entry.name))
            raise RegistryError(f"Composite commands form a cycle: {chain}")
        for step in entry.steps:
            target = self._lookup(step)
            if isinstance(target, CompositeCommand):
                self._check_cycles(target, (*trail, entry.name))


def _flatten(node: Mapping[str, Any], prefix: str) -> Iterator[RegistryItem]:
    for raw_key, value in node.items():
        key = str(raw_key)
        if not key or "." in key:
            raise RegistryError(f"Invalid script key {raw_key!r} under '{prefix or '<root>'}'")
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, str):
            yield CommandEntry(name=name, invocation=value)
        elif isinstance(value, Mapping) and _SEQUENCE_KEY in value:
            yield _composite_from_mapping(name, value)
        elif isinstance(value, Mapping) and _SCRIPT_KEY in value:
            yield CommandEntry(
                name=name,
                invocation=value[_SCRIPT_KEY],
                description=str(value.get(_DESCRIPTION_KEY, "")),
            )
        elif isinstance(value, Mapping):
            nested = list(_flatten(value, name))
            if not nested:
                raise RegistryError(f"Group '{name}' defines no commands")
            yield from nested
        else:
            raise RegistryError(
                f"Unsupported definition for '{name}': expected a string or mapping, "
                f"got {type(value).__name__}"
            )


def _composite_from_mapping(name: str, value: Mapping[str, Any]) -> CompositeCommand:
    steps = value[_SEQUENCE_KEY]
    if isinstance(steps, str) or not isinstance(steps, (list, tuple)):
        raise RegistryError(f"Composite command '{name}' must list its steps as a sequence")
    return CompositeCommand(
        name=name,
        steps=tuple(steps),
        description=str(value.get(_DESCRIPTION_KEY, "")),
    )
