"""Dependency installer tests."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest
from nx_test_executor.command_running import ProcessOutput, TaskRunnerCommand
from nx_test_executor.dependency_install import (
    InstallError,
    ManifestCheckError,
    ManifestNotFoundError,
    install_dependencies,
)


class FakeProcessRunner:
    def __init__(self, outcome: ProcessOutput | None = None, error: OSError | None = None) -> None:
        self.outcome = outcome or ProcessOutput(output=b"added 12 packages", exit_code=0)
        self.error = error
        self.calls: list[tuple[Path, TaskRunnerCommand, Mapping[str, str]]] = []

    def run(
        self, working_dir: Path, command: TaskRunnerCommand, env_overrides: Mapping[str, str]
    ) -> ProcessOutput:
        self.calls.append((working_dir, command, env_overrides))
        if self.error is not None:
            raise self.error
        return self.outcome


def _with_manifest(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    return tmp_path


def test_runs_install_in_run_path_with_env_overrides(tmp_path: Path) -> None:
    runner = FakeProcessRunner()

    output = install_dependencies(
        _with_manifest(tmp_path),
        dependency_manager="yarn",
        env_overrides={"CI": "true"},
        process_runner=runner,
    )

    assert output == b"added 12 packages"
    assert len(runner.calls) == 1
    working_dir, command, env_overrides = runner.calls[0]
    assert working_dir == tmp_path
    assert command.tokens == ("yarn", "install")
    assert env_overrides == {"CI": "true"}


def test_missing_manifest_fails_without_running_install(tmp_path: Path) -> None:
    runner = FakeProcessRunner()

    with pytest.raises(ManifestNotFoundError, match="package.json file not found"):
        install_dependencies(
            tmp_path, dependency_manager="npm", env_overrides={}, process_runner=runner
        )

    assert runner.calls == []


def test_missing_run_path_is_a_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestNotFoundError):
        install_dependencies(
            tmp_path / "not-checked-out",
            dependency_manager="npm",
            env_overrides={},
            process_runner=FakeProcessRunner(),
        )


def test_other_stat_errors_are_check_errors(tmp_path: Path) -> None:
    run_path = tmp_path / "file-not-dir"
    run_path.write_text("", encoding="utf-8")

    with pytest.raises(ManifestCheckError, match="checking package.json"):
        install_dependencies(
            run_path,
            dependency_manager="npm",
            env_overrides={},
            process_runner=FakeProcessRunner(),
        )


def test_non_zero_install_surfaces_exit_code_and_output(tmp_path: Path) -> None:
    runner = FakeProcessRunner(ProcessOutput(output=b"ERR! 404 left-pad", exit_code=1))

    with pytest.raises(InstallError) as excinfo:
        install_dependencies(
            _with_manifest(tmp_path),
            dependency_manager="npm",
            env_overrides={},
            process_runner=runner,
        )

    assert "npm install error: exit code 1" in str(excinfo.value)
    assert "ERR! 404 left-pad" in str(excinfo.value)
    assert excinfo.value.output == b"ERR! 404 left-pad"


def test_spawn_failure_is_an_install_error(tmp_path: Path) -> None:
    runner = FakeProcessRunner(error=FileNotFoundError("npm"))

    with pytest.raises(InstallError, match="npm install error") as excinfo:
        install_dependencies(
            _with_manifest(tmp_path),
            dependency_manager="npm",
            env_overrides={},
            process_runner=runner,
        )

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
