# SPDX-License-Identifier: MIT
"""Pytest configuration for the repository root.

Its presence makes the repository root importable, so the test-suite can use
``tests.*`` helper modules and the in-tree :mod:`ve3_tasks` package without
installing it first.
"""

from __future__ import annotations

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "shell: test spawns real processes through the system shell"
    )
