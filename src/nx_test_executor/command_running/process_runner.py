"""External process execution service."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .command_builder import TaskRunnerCommand

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """Raised when the child process environment cannot be prepared."""


@dataclass(frozen=True)
class ProcessOutput:
    """Combined stdout/stderr of a finished process and its exit code."""

    output: bytes
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessRunner(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for running one external command to completion."""

    def run(
        self,
        working_dir: Path,
        command: TaskRunnerCommand,
        env_overrides: Mapping[str, str],
    ) -> ProcessOutput: ...


class SubprocessProcessRunner:  # pylint: disable=too-few-public-methods
    """Real process runner backed by subprocess.

    The child gets a copy of the current environment updated with `env_overrides`;
    the environment of this process is left untouched. Spawn failures (OSError)
    propagate to the caller.
    """

    def run(
        self,
        working_dir: Path,
        command: TaskRunnerCommand,
        env_overrides: Mapping[str, str],
    ) -> ProcessOutput:
        environment = {**os.environ, **env_overrides}
        logger.debug("running %s in %s", command.shell_text(), working_dir)
        completed = subprocess.run(
            list(command.tokens),
            cwd=working_dir,
            env=environment,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
        logger.debug("%s exited with code %d", command.program, completed.returncode)
        return ProcessOutput(output=completed.stdout or b"", exit_code=completed.returncode)


def build_env_overrides(envs: Mapping[str, str]) -> dict[str, str]:
    """Validate the plain execution envs and return them as a child environment map."""
    overrides: dict[str, str] = {}
    for key, value in envs.items():
        if not key or "=" in key or "\x00" in key:
            raise SetupError(f"setting env var: invalid variable name {key!r}")
        if "\x00" in value:
            raise SetupError(f"setting env var: value of {key!r} contains a NUL byte")
        overrides[key] = value
    return overrides


def check_command_tokens(command: TaskRunnerCommand) -> None:
    """Reject tokens the operating system cannot pass as process arguments."""
    for position, token in enumerate(command.tokens):
        if "\x00" in token:
            raise SetupError(f"building command: argument {position} contains a NUL byte")
