"""Execution request domain exports."""

from .request_models import (
    ExecutionContent,
    ExecutionRequest,
    Repository,
    Variable,
    resolve_run_path,
)
from .request_reader import ExecutionRequestError, parse_execution_request, read_execution_request
from .validation import (
    ExecutionValidationError,
    MissingContentError,
    MissingRepositoryError,
    MissingRevisionError,
    UnsupportedContentError,
    validate_execution,
)

__all__ = [
    "ExecutionContent",
    "ExecutionRequest",
    "Repository",
    "Variable",
    "resolve_run_path",
    "ExecutionRequestError",
    "parse_execution_request",
    "read_execution_request",
    "ExecutionValidationError",
    "MissingContentError",
    "MissingRepositoryError",
    "MissingRevisionError",
    "UnsupportedContentError",
    "validate_execution",
]
