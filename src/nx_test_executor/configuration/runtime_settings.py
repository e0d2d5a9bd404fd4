"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_NX_COMMAND = "e2e"
DEFAULT_DEPENDENCY_MANAGER = "npm"
DEFAULT_NX_BINARY = "./node_modules/.bin/nx"


@dataclass(frozen=True)
class RunnerConfig:  # pylint: disable=too-many-instance-attributes
    """Runner settings read once per process from the environment."""

    endpoint: str
    access_key_id: str
    secret_access_key: str
    location: str
    token: str
    ssl: bool
    scraper_enabled: bool
    git_username: str
    git_token: str
    datadir: Path | None
    nx_project: str
    nx_command: str = DEFAULT_NX_COMMAND
    dependency_manager: str = DEFAULT_DEPENDENCY_MANAGER
    nx_binary: str = DEFAULT_NX_BINARY
    status_from_steps: bool = False
