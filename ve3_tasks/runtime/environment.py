"""Environment overrides handed to spawned scripts.

Overrides come from a dotenv-style file: ``--env-file`` when given, otherwise
``.env`` in the directory scripts run in (``--cwd`` or the current
directory).  They are passed to children explicitly instead of being written
into the runner's own :data:`os.environ`, and only key names are ever logged.
"""

from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ve3_tasks.commands.base import ConfigError

LOGGER = logging.getLogger(__name__)

ENV_FILENAME = ".env"


@dataclass(frozen=True, slots=True)
class EnvironmentOverrides:
    """Variables read from one env file, in file order."""

    source: Path
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:  # type: ignore[override]
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def keys(self) -> tuple[str, ...]:
        return tuple(self.variables)

    def describe(self) -> str:
        if not self.variables:
            return f"{self.source}: no variables"
        return f"{self.source}: {', '.join(self.keys())}"


def _parse_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def read_env_file(path: Path) -> EnvironmentOverrides:
    """Parse *path*; later assignments of the same key win."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read environment file {path}: {exc}") from exc
    variables: dict[str, str] = {}
    for raw_line in text.splitlines():
        parsed = _parse_line(raw_line)
        if parsed is not None:
            variables[parsed[0]] = parsed[1]
    return EnvironmentOverrides(source=path, variables=variables)


def load_overrides(
    env_file: Path | None = None, cwd: Path | None = None
) -> EnvironmentOverrides | None:
    """Return overrides for spawned scripts, or ``None`` when there is no env file.

    An explicit *env_file* must exist; the implicit ``.env`` is optional.
    """

    if env_file is not None:
        if not env_file.exists():
            raise ConfigError(f"Environment file not found: {env_file}")
        overrides = read_env_file(env_file)
    else:
        candidate = (cwd or Path.cwd()) / ENV_FILENAME
        if not candidate.is_file():
            return None
        overrides = read_env_file(candidate)
    LOGGER.debug("Environment overrides from %s", overrides.describe())
    return overrides


__all__ = ["ENV_FILENAME", "EnvironmentOverrides", "load_overrides", "read_env_file"]
