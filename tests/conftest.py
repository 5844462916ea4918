# SPDX-License-Identifier: MIT
"""Shared fixtures for the ve3-tasks test-suite."""

from __future__ import annotations

import logging
import subprocess
import textwrap
from pathlib import Path
from typing import Iterator
from unittest import mock

import pytest

from ve3_tasks.config import CONFIG_ENV_VAR, load_registry
from ve3_tasks.registry import CommandRegistry


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep global logging and config lookup state from leaking between tests."""

    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def bundled_registry() -> CommandRegistry:
    return load_registry()


@pytest.fixture
def fake_run() -> Iterator[mock.Mock]:
    """Patch :func:`subprocess.run` so every shell command succeeds."""

    with mock.patch("ve3_tasks.commands.base.subprocess.run") as mocked:
        mocked.side_effect = lambda invocation, **_: subprocess.CompletedProcess(invocation, 0)
        yield mocked


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(body: str, name: str = "package-scripts.yml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write
