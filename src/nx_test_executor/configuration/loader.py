"""Environment-backed runner configuration loader."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict
from pathlib import Path

from .runtime_settings import (
    DEFAULT_DEPENDENCY_MANAGER,
    DEFAULT_NX_BINARY,
    DEFAULT_NX_COMMAND,
    RunnerConfig,
)

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_MASKED_FIELDS = ("secret_access_key", "token", "git_token")
_MASK = "*****"


class ConfigurationError(Exception):
    """Raised when runner settings are missing or malformed."""


def load_runner_config(environ: Mapping[str, str] | None = None) -> RunnerConfig:
    """Read runner settings from environment variables.

    Args:
      environ: Variable source; defaults to the process environment.

    Returns:
      The parsed runner configuration.

    Raises:
      ConfigurationError: If a boolean is malformed or the nx project/command is empty.
    """
    source = os.environ if environ is None else environ

    nx_project = source.get("RUNNER_NX_PROJECT", "")
    if not nx_project.strip():
        raise ConfigurationError(
            "nx project must be defined (expected RUNNER_NX_PROJECT not to be empty)"
        )
    nx_command = source.get("RUNNER_NX_COMMAND", DEFAULT_NX_COMMAND)
    if not nx_command.strip():
        raise ConfigurationError(
            "nx command must be defined (expected RUNNER_NX_COMMAND not to be empty)"
        )

    return RunnerConfig(
        endpoint=source.get("RUNNER_ENDPOINT", ""),
        access_key_id=source.get("RUNNER_ACCESSKEYID", ""),
        secret_access_key=source.get("RUNNER_SECRETACCESSKEY", ""),
        location=source.get("RUNNER_LOCATION", ""),
        token=source.get("RUNNER_TOKEN", ""),
        ssl=_parse_bool(source, "RUNNER_SSL"),
        scraper_enabled=_parse_bool(source, "RUNNER_SCRAPPERENABLED"),
        git_username=source.get("RUNNER_GITUSERNAME", ""),
        git_token=source.get("RUNNER_GITTOKEN", ""),
        datadir=_optional_path(source, "RUNNER_DATADIR"),
        nx_project=nx_project.strip(),
        nx_command=nx_command.strip(),
        dependency_manager=_optional_string(
            source, "DEPENDENCY_MANAGER", DEFAULT_DEPENDENCY_MANAGER
        ),
        nx_binary=_optional_string(source, "RUNNER_NX_BINARY", DEFAULT_NX_BINARY),
        status_from_steps=_parse_bool(source, "RUNNER_STATUS_FROM_STEPS"),
    )


def describe_runner_config(config: RunnerConfig) -> dict[str, object]:
    """Return a loggable view of the configuration with credentials masked."""
    described: dict[str, object] = asdict(config)
    for field_name in _MASKED_FIELDS:
        if described[field_name]:
            described[field_name] = _MASK
    described["datadir"] = str(config.datadir) if config.datadir is not None else ""
    return described


def _parse_bool(source: Mapping[str, str], name: str) -> bool:
    raw = source.get(name)
    if raw is None or raw == "":
        return False
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _optional_string(source: Mapping[str, str], name: str, default: str) -> str:
    value = source.get(name, "").strip()
    return value or default


def _optional_path(source: Mapping[str, str], name: str) -> Path | None:
    value = source.get(name, "").strip()
    return Path(value) if value else None
