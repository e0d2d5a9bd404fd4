"""Execution request entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

SINGLE_FILE_CONTENT_TYPES = frozenset({"string", "file-uri"})


@dataclass(frozen=True)
class Repository:
    """Repository checkout the execution runs against."""

    uri: str = ""
    branch: str = ""
    commit: str = ""
    path: str = ""
    working_dir: str = ""

    @property
    def has_revision(self) -> bool:
        return bool(self.branch or self.commit)


@dataclass(frozen=True)
class ExecutionContent:
    """What to run: a repository reference or single-file data."""

    content_type: str = ""
    repository: Repository | None = None
    data: str = ""

    def is_file(self) -> bool:
        return self.content_type in SINGLE_FILE_CONTENT_TYPES


@dataclass(frozen=True)
class Variable:
    """Declared execution variable; secret ones are resolved before use."""

    name: str
    value: str = ""
    is_secret: bool = False


@dataclass(frozen=True)
class ExecutionRequest:
    """Input contract for one execution."""

    id: str
    name: str = ""
    content: ExecutionContent | None = None
    variables: Mapping[str, Variable] = field(default_factory=dict)
    envs: Mapping[str, str] = field(default_factory=dict)
    args: tuple[str, ...] = ()


def resolve_run_path(datadir: Path, repository: Repository) -> Path:
    """Return the directory the task runner is executed in.

    The working dir, when set, wins over the repository path.
    """
    relative = repository.working_dir or repository.path
    return datadir / "repo" / relative
