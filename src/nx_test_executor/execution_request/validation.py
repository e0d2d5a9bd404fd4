"""Pre-flight validation of execution requests."""

from __future__ import annotations

from .request_models import ExecutionRequest, Repository


class ExecutionValidationError(Exception):
    """Raised when an execution request cannot be run by this executor."""


class MissingContentError(ExecutionValidationError):
    """The request carries no content descriptor."""


class UnsupportedContentError(ExecutionValidationError):
    """The request carries single-file content instead of a repository."""


class MissingRepositoryError(ExecutionValidationError):
    """The content descriptor has no repository reference."""


class MissingRevisionError(ExecutionValidationError):
    """The repository reference has neither a branch nor a commit."""


def validate_execution(request: ExecutionRequest) -> Repository:
    """Fail fast unless the request points at a repository revision.

    Returns:
      The validated repository reference.
    """
    content = request.content
    if content is None:
        raise MissingContentError(
            f"can't find any content to run in execution data (execution {request.id!r})"
        )
    if content.is_file():
        raise UnsupportedContentError(
            f"single file content not supported for nx execution "
            f"(execution {request.id!r}, content type {content.content_type!r})"
        )
    if content.repository is None:
        raise MissingRepositoryError(
            "nx executor handles only repository based tests, but repository is missing"
        )
    if not content.repository.has_revision:
        raise MissingRevisionError(
            f"can't find branch or commit in params, repository: {content.repository.uri!r}"
        )
    return content.repository
