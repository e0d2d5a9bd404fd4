"""Execution result entities."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

TEXT_OUTPUT_TYPE = "text/plain"


class ExecutionStatus(str, Enum):
    """Overall or per-step execution outcome."""

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """One test case flattened out of the parsed report."""

    name: str
    duration: str
    status: ExecutionStatus


@dataclass(frozen=True)
class ExecutionResult:
    """Normalized outcome of one execution.

    Instances are never mutated; `with_errors` and `with_status` return new values
    so already gathered steps survive any error attached later.
    """

    status: ExecutionStatus
    output: str = ""
    output_type: str = TEXT_OUTPUT_TYPE
    steps: tuple[StepResult, ...] = ()
    errors: tuple[str, ...] = ()

    @staticmethod
    def from_error(error: BaseException | str) -> ExecutionResult:
        """Return an empty failed result carrying one error."""
        return ExecutionResult(status=ExecutionStatus.FAILED, errors=(str(error),))

    def with_errors(self, *errors: BaseException | str | None) -> ExecutionResult:
        """Attach every non-None error; any attached error fails the result."""
        messages = tuple(str(error) for error in errors if error is not None)
        if not messages:
            return self
        return replace(self, status=ExecutionStatus.FAILED, errors=self.errors + messages)

    def with_status(self, status: ExecutionStatus) -> ExecutionResult:
        """Return a copy with `status` and everything else kept."""
        return replace(self, status=status)

    @property
    def error_message(self) -> str | None:
        """Attached errors joined with "; ", or None when there are none."""
        return "; ".join(self.errors) if self.errors else None

    @property
    def failed_steps(self) -> tuple[StepResult, ...]:
        """Steps whose status is failed."""
        return tuple(step for step in self.steps if step.status is ExecutionStatus.FAILED)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready representation printed for the host."""
        return {
            "status": self.status.value,
            "output": self.output,
            "outputType": self.output_type,
            "errorMessage": self.error_message,
            "steps": [
                {"name": step.name, "duration": step.duration, "status": step.status.value}
                for step in self.steps
            ],
        }
