"""Configuration domain exports."""

from .loader import ConfigurationError, describe_runner_config, load_runner_config
from .runtime_settings import (
    DEFAULT_DEPENDENCY_MANAGER,
    DEFAULT_NX_BINARY,
    DEFAULT_NX_COMMAND,
    RunnerConfig,
)

__all__ = [
    "RunnerConfig",
    "ConfigurationError",
    "load_runner_config",
    "describe_runner_config",
    "DEFAULT_DEPENDENCY_MANAGER",
    "DEFAULT_NX_BINARY",
    "DEFAULT_NX_COMMAND",
]
