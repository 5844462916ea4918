"""Load script definitions from YAML configuration."""
from __future__ import annotations

# SPDX-License-Identifier: MIT

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml

from ve3_tasks.commands.base import ConfigError
from ve3_tasks.registry import CommandRegistry

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "package-scripts.yml"
CONFIG_ENV_VAR = "VE3_TASKS_CONFIG"
CURRENT_SCHEMA_VERSION = 1


def _parse_document(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file is not valid YAML: {source} ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {source}")
    return data


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    return _parse_document(text, str(path))


def _load_bundled() -> dict[str, Any]:
    text = resources.files("ve3_tasks").joinpath(CONFIG_FILENAME).read_text(encoding="utf-8")
    return _parse_document(text, f"<bundled {CONFIG_FILENAME}>")


def locate_config(explicit: Path | None = None, cwd: Path | None = None) -> Path | None:
    """Return the configuration path to use, or ``None`` for the bundled default.

    Precedence: *explicit*, then ``$VE3_TASKS_CONFIG``, then
    ``package-scripts.yml`` in *cwd*.  An explicitly requested file must exist.
    """

    if explicit is not None:
        return explicit
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
    if candidate.exists():
        return candidate
    return None


def scripts_from_document(data: Mapping[str, Any], source: str) -> Mapping[str, Any]:
    version = data.get("version", CURRENT_SCHEMA_VERSION)
    # bool is an int subclass; YAML "true" must not read as version 1
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise ConfigError(
            f"Invalid configuration version {version!r} in {source}: expected a positive integer"
        )
    if version > CURRENT_SCHEMA_VERSION:
        raise ConfigError(
            f"Configuration version {version} is newer than supported {CURRENT_SCHEMA_VERSION}."
            " Please upgrade the tooling before proceeding."
        )
    scripts = data.get("scripts")
    if not isinstance(scripts, Mapping) or not scripts:
        raise ConfigError(f"Configuration {source} does not define any 'scripts'")
    return scripts


def load_registry(path: Path | None = None) -> CommandRegistry:
    """Build the command registry from *path* or from the bundled definitions."""

    if path is None:
        data = _load_bundled()
        source = f"<bundled {CONFIG_FILENAME}>"
    else:
        data = _load_yaml(path)
        source = str(path)
    registry = CommandRegistry.from_mapping(scripts_from_document(data, source))
    LOGGER.debug("Loaded %d script definitions from %s", len(registry), source)
    return registry


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "CURRENT_SCHEMA_VERSION",
    "load_registry",
    "locate_config",
    "scripts_from_document",
]
