"""Run execution domain exports."""

from .nx_test_runner import DataDirNotFoundError, NxTestRunner, RunExecutionError, create_runner

__all__ = [
    "DataDirNotFoundError",
    "NxTestRunner",
    "RunExecutionError",
    "create_runner",
]
