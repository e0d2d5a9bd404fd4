"""Command running exports."""

from .command_builder import TaskRunnerCommand, build_install_command, build_nx_command
from .process_runner import (
    ProcessOutput,
    ProcessRunner,
    SetupError,
    SubprocessProcessRunner,
    build_env_overrides,
    check_command_tokens,
)

__all__ = [
    "TaskRunnerCommand",
    "build_install_command",
    "build_nx_command",
    "ProcessOutput",
    "ProcessRunner",
    "SetupError",
    "SubprocessProcessRunner",
    "build_env_overrides",
    "check_command_tokens",
]
