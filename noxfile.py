"""Nox sessions for ve3-tasks automation."""

from __future__ import annotations

import pathlib

import nox

REPO_ROOT = pathlib.Path(__file__).parent

nox.options.sessions = ["tests", "lint"]
nox.options.error_on_missing_interpreters = False


@nox.session(python=["3.11", "3.12"])
def tests(session: nox.Session) -> None:
    """Run the pytest suite."""

    session.install("-e", ".[test]")
    session.run("pytest", "tests/", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Run linters via ruff."""

    session.install("ruff")
    session.run("ruff", "check", str(REPO_ROOT / "ve3_tasks"), str(REPO_ROOT / "tests"))
