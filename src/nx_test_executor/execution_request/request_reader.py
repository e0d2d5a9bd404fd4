"""Execution request document reader."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .request_models import ExecutionContent, ExecutionRequest, Repository, Variable

SECRET_VARIABLE_TYPE = "secret"


class ExecutionRequestError(Exception):
    """Raised when the execution document is missing or malformed."""


def read_execution_request(source: str) -> ExecutionRequest:
    """Read an execution request from inline JSON/YAML text or from a file path."""
    text = _load_source_text(source)
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ExecutionRequestError(f"Failed to parse execution document: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise ExecutionRequestError("Execution document root must be a mapping.")
    return parse_execution_request(parsed)


def parse_execution_request(document: Mapping[str, Any]) -> ExecutionRequest:
    """Build an ExecutionRequest from the host's execution document shape."""
    execution_id = _require_non_empty_string(document.get("id"), "id")
    return ExecutionRequest(
        id=execution_id,
        name=_optional_string(document.get("name"), "name"),
        content=_parse_content(document.get("content")),
        variables=_parse_variables(document.get("variables")),
        envs=_parse_envs(document.get("envs")),
        args=_parse_args(document.get("args")),
    )


def _load_source_text(source: str) -> str:
    stripped = source.strip()
    if not stripped:
        raise ExecutionRequestError("Execution document is empty.")
    if stripped.startswith(("{", "[")):
        return stripped
    path = Path(stripped)
    if not path.exists():
        raise ExecutionRequestError(f"Execution document not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExecutionRequestError(f"Failed to read execution document {path}: {exc}") from exc


def _parse_content(value: Any) -> ExecutionContent | None:
    if value is None:
        return None
    section = _require_mapping(value, "content")
    repository_value = section.get("repository")
    repository = None
    if repository_value is not None:
        repository_section = _require_mapping(repository_value, "content.repository")
        repository = Repository(
            uri=_optional_string(repository_section.get("uri"), "content.repository.uri"),
            branch=_optional_string(repository_section.get("branch"), "content.repository.branch"),
            commit=_optional_string(repository_section.get("commit"), "content.repository.commit"),
            path=_optional_string(repository_section.get("path"), "content.repository.path"),
            working_dir=_optional_string(
                repository_section.get("workingDir"), "content.repository.workingDir"
            ),
        )
    return ExecutionContent(
        content_type=_optional_string(section.get("type"), "content.type"),
        repository=repository,
        data=_optional_string(section.get("data"), "content.data"),
    )


def _parse_variables(value: Any) -> dict[str, Variable]:
    if value is None:
        return {}
    section = _require_mapping(value, "variables")
    variables: dict[str, Variable] = {}
    for key, raw_variable in section.items():
        label = f"variables.{key}"
        entry = _require_mapping(raw_variable, label)
        name = _optional_string(entry.get("name"), f"{label}.name") or str(key)
        variable_type = _optional_string(entry.get("type"), f"{label}.type")
        variables[str(key)] = Variable(
            name=name,
            value=_scalar_to_string(entry.get("value"), f"{label}.value"),
            is_secret=variable_type == SECRET_VARIABLE_TYPE,
        )
    return variables


def _parse_envs(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    section = _require_mapping(value, "envs")
    return {str(key): _scalar_to_string(item, f"envs.{key}") for key, item in section.items()}


def _parse_args(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ExecutionRequestError("args must be a list of strings.")
    return tuple(_scalar_to_string(item, "args") for item in value)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ExecutionRequestError(f"Execution section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ExecutionRequestError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ExecutionRequestError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ExecutionRequestError(f"{field_name} must be a string.")
    return value.strip()


def _scalar_to_string(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    raise ExecutionRequestError(f"{field_name} must be a scalar value.")
