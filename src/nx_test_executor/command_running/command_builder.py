"""Task runner command composition."""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TaskRunnerCommand:
    """Ordered argument tokens passed to the process runner without a shell."""

    tokens: tuple[str, ...]

    @property
    def program(self) -> str:
        return self.tokens[0]

    def shell_text(self) -> str:
        """Return a quoted rendering for logs and error messages."""
        return shlex.join(self.tokens)


def build_nx_command(
    *,
    nx_binary: str,
    nx_command: str,
    nx_project: str,
    assignments: Sequence[str] = (),
    args: Sequence[str] = (),
) -> TaskRunnerCommand:
    """Compose `nx run <command> --target=<project> [--env A=1,B=2] [args...]`."""
    tokens = [nx_binary, "run", nx_command, f"--target={nx_project}"]
    if assignments:
        tokens.extend(["--env", ",".join(assignments)])
    tokens.extend(args)
    return TaskRunnerCommand(tokens=tuple(tokens))


def build_install_command(dependency_manager: str) -> TaskRunnerCommand:
    """Compose the package manager install command, e.g. `npm install`."""
    return TaskRunnerCommand(tokens=(*shlex.split(dependency_manager), "install"))
