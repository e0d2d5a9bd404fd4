"""CLI error-handling tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from nx_test_executor.cli import main


def test_missing_execution_argument_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing argument" in captured.err
    assert "Traceback" not in captured.err


def test_configuration_error_is_fatal_and_reported_as_structured_error(
    capsys, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("RUNNER_NX_PROJECT", raising=False)

    exit_code = main(["run", "does-not-matter.json"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.out == ""
    error_line = json.loads(captured.err.strip().splitlines()[-1])
    assert error_line["type"] == "error"
    assert error_line["content"].startswith("could not initialize runner:")
    assert "RUNNER_NX_PROJECT" in error_line["content"]


def test_malformed_boolean_setting_is_fatal(capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUNNER_NX_PROJECT", "web-app-e2e")
    monkeypatch.setenv("RUNNER_SSL", "maybe")

    exit_code = main(["run", "{}"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "RUNNER_SSL" in captured.err


def test_invalid_execution_document_is_reported(
    tmp_path: Path, capsys, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("RUNNER_NX_PROJECT", "web-app-e2e")
    monkeypatch.setenv("RUNNER_DATADIR", str(tmp_path))
    monkeypatch.delenv("RUNNER_SCRAPPERENABLED", raising=False)

    exit_code = main(["run", str(tmp_path / "missing.json")])
    captured = capsys.readouterr()

    assert exit_code == 1
    error_line = json.loads(captured.err.strip().splitlines()[-1])
    assert "Execution document not found" in error_line["content"]
