from __future__ import annotations

import subprocess
from pathlib import Path
from unittest import mock

import pytest

from tests.schema_modules import MODULES
from ve3_tasks.commands.base import ChildProcessFailure, UnknownCommand
from ve3_tasks.registry import CommandRegistry
from ve3_tasks.runner import ScriptRunner
from ve3_tasks.runtime import EXIT_CODES

ASSET_GAUGE = (
    "json2ts -i contracts/asset-gauge/schema/raw/*.json "
    "-o ../liquid-staking-scripts/types/ve3/asset-gauge"
)


def _invocations(mocked: mock.Mock) -> list[str]:
    return [call.args[0] for call in mocked.call_args_list]


def test_single_command_runs_once_unmodified(
    bundled_registry: CommandRegistry, fake_run: mock.Mock
) -> None:
    result = ScriptRunner(bundled_registry).run("schema.asset-gauge")

    fake_run.assert_called_once()
    assert fake_run.call_args.args == (ASSET_GAUGE,)
    assert fake_run.call_args.kwargs["shell"] is True
    assert result.exit_code == 0
    assert [entry.name for entry in result.executed] == ["schema.asset-gauge"]


def test_child_exit_code_is_returned_unchanged(bundled_registry: CommandRegistry) -> None:
    with mock.patch("ve3_tasks.commands.base.subprocess.run") as mocked:
        mocked.return_value = subprocess.CompletedProcess(ASSET_GAUGE, 3)
        with pytest.raises(ChildProcessFailure) as excinfo:
            ScriptRunner(bundled_registry).run("schema.asset-gauge")

    mocked.assert_called_once()
    assert excinfo.value.returncode == 3
    assert excinfo.value.exit_code == 3
    assert excinfo.value.command == "schema.asset-gauge"


def test_signal_termination_maps_to_shell_convention(bundled_registry: CommandRegistry) -> None:
    with mock.patch("ve3_tasks.commands.base.subprocess.run") as mocked:
        mocked.return_value = subprocess.CompletedProcess(ASSET_GAUGE, -9)
        with pytest.raises(ChildProcessFailure) as excinfo:
            ScriptRunner(bundled_registry).run("schema.asset-gauge")

    assert excinfo.value.exit_code == 137


def test_schema_default_runs_steps_in_declared_order(
    bundled_registry: CommandRegistry, fake_run: mock.Mock
) -> None:
    ScriptRunner(bundled_registry).run("schema.default")

    expected = [bundled_registry["schema.create"].invocation] + [
        bundled_registry[f"schema.{module}"].invocation for module in MODULES
    ]
    assert _invocations(fake_run) == expected


def test_schema_default_stops_after_first_failure(bundled_registry: CommandRegistry) -> None:
    failing = bundled_registry["schema.bribe-manager"].invocation

    def _run(invocation: str, **_: object) -> subprocess.CompletedProcess[bytes]:
        return subprocess.CompletedProcess(invocation, 2 if invocation == failing else 0)

    with mock.patch("ve3_tasks.commands.base.subprocess.run", side_effect=_run) as mocked:
        with pytest.raises(ChildProcessFailure) as excinfo:
            ScriptRunner(bundled_registry).run("schema")

    assert _invocations(mocked)[-1] == failing
    assert mocked.call_count == 4
    assert excinfo.value.command == "schema.bribe-manager"
    assert excinfo.value.exit_code == 2


def test_unknown_command_spawns_nothing(
    bundled_registry: CommandRegistry, fake_run: mock.Mock
) -> None:
    with pytest.raises(UnknownCommand) as excinfo:
        ScriptRunner(bundled_registry).run("schema.nope")

    fake_run.assert_not_called()
    assert excinfo.value.exit_code == EXIT_CODES["command_not_found"]


def test_unknown_name_in_batch_is_detected_before_spawning(
    bundled_registry: CommandRegistry, fake_run: mock.Mock
) -> None:
    with pytest.raises(UnknownCommand):
        ScriptRunner(bundled_registry).run_many(["schema.create", "schema.nope"])

    fake_run.assert_not_called()


def test_dry_run_spawns_nothing(bundled_registry: CommandRegistry, fake_run: mock.Mock) -> None:
    result = ScriptRunner(bundled_registry, dry_run=True).run("schema")

    fake_run.assert_not_called()
    assert result.dry_run is True
    assert len(result.executed) == 1 + len(MODULES)


@pytest.mark.shell
def test_real_shell_runs_sequentially_and_fails_fast(tmp_path: Path) -> None:
    registry = CommandRegistry.from_mapping(
        {
            "step": {
                "one": "echo one >> log.txt",
                "two": "echo two >> log.txt; exit 4",
                "three": "echo three >> log.txt",
            },
            "all": {"sequence": ["step.one", "step.two", "step.three"]},
        }
    )

    with pytest.raises(ChildProcessFailure) as excinfo:
        ScriptRunner(registry, cwd=tmp_path).run("all")

    assert excinfo.value.exit_code == 4
    assert (tmp_path / "log.txt").read_text(encoding="utf-8").split() == ["one", "two"]


@pytest.mark.shell
def test_shell_expands_globs_in_invocation(tmp_path: Path) -> None:
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    (tmp_path / "b.json").write_text("{}", encoding="utf-8")
    registry = CommandRegistry.from_mapping({"glob": "ls *.json > out.txt"})

    ScriptRunner(registry, cwd=tmp_path).run("glob")

    assert (tmp_path / "out.txt").read_text(encoding="utf-8").split() == ["a.json", "b.json"]


@pytest.mark.shell
def test_environment_overrides_reach_child(tmp_path: Path) -> None:
    registry = CommandRegistry.from_mapping({"check": 'test "$VE3_SAMPLE" = present'})

    result = ScriptRunner(registry, cwd=tmp_path, env={"VE3_SAMPLE": "present"}).run("check")

    assert result.exit_code == 0


@pytest.mark.shell
def test_missing_working_directory_is_reported(tmp_path: Path) -> None:
    registry = CommandRegistry.from_mapping({"noop": "true"})

    with pytest.raises(ChildProcessFailure) as excinfo:
        ScriptRunner(registry, cwd=tmp_path / "missing").run("noop")

    assert excinfo.value.exit_code == EXIT_CODES["missing_resource"]
    assert excinfo.value.command == "noop"
    assert "'noop'" in str(excinfo.value)
