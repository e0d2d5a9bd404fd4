"""Variable resolution exports."""

from .secret_env_manager import (
    REDACTION_MARKER,
    ResolvedVariables,
    SecretEnvManager,
    VariableManager,
)

__all__ = ["REDACTION_MARKER", "ResolvedVariables", "SecretEnvManager", "VariableManager"]
