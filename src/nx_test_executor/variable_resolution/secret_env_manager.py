"""Execution variable resolution and output obfuscation."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from nx_test_executor.execution_request import Variable

REDACTION_MARKER = "*****"


@dataclass(frozen=True)
class ResolvedVariables:
    """Variables with secret values filled in, in declaration order."""

    variables: tuple[Variable, ...] = ()

    def as_assignments(self) -> tuple[str, ...]:
        return tuple(f"{variable.name}={variable.value}" for variable in self.variables)

    @property
    def secret_values(self) -> tuple[str, ...]:
        return tuple(
            variable.value for variable in self.variables if variable.is_secret and variable.value
        )

    def __len__(self) -> int:
        return len(self.variables)


class VariableManager(Protocol):
    """Protocol for resolving variables and scrubbing their secrets from output."""

    def resolve(self, variables: Mapping[str, Variable]) -> ResolvedVariables: ...

    def obfuscate(self, output: bytes) -> bytes: ...


class SecretEnvManager:
    """Resolves secret variables from a secret source mounted as environment variables.

    A secret variable takes the value stored under its name in the secret source; when
    the source has no such entry the declared value is kept. Values seen by `resolve`
    are remembered and redacted by `obfuscate`.
    """

    def __init__(self, secret_source: Mapping[str, str] | None = None) -> None:
        self._secret_source = os.environ if secret_source is None else secret_source
        self._secret_values: tuple[bytes, ...] = ()

    def resolve(self, variables: Mapping[str, Variable]) -> ResolvedVariables:
        resolved = tuple(self._resolve_one(variable) for variable in variables.values())
        result = ResolvedVariables(variables=resolved)
        # longest first so a secret that contains another one is redacted whole
        self._secret_values = tuple(
            sorted(
                {value.encode("utf-8") for value in result.secret_values},
                key=len,
                reverse=True,
            )
        )
        return result

    def obfuscate(self, output: bytes) -> bytes:
        marker = REDACTION_MARKER.encode("utf-8")
        for secret in self._secret_values:
            output = output.replace(secret, marker)
        return output

    def _resolve_one(self, variable: Variable) -> Variable:
        if not variable.is_secret:
            return variable
        secret_value = self._secret_source.get(variable.name)
        if secret_value is None:
            return variable
        return Variable(name=variable.name, value=secret_value, is_secret=True)
