"""Local dependency installation for the checked-out project."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from nx_test_executor.command_running import ProcessRunner, build_install_command

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


class DependencyInstallError(Exception):
    """Raised when dependencies cannot be installed; the execution cannot start."""


class ManifestNotFoundError(DependencyInstallError):
    """The run directory holds no package manifest."""


class ManifestCheckError(DependencyInstallError):
    """Checking for the package manifest failed for a reason other than absence."""


class InstallError(DependencyInstallError):
    """The package manager install command failed."""

    def __init__(self, message: str, *, output: bytes = b"") -> None:
        super().__init__(message)
        self.output = output


def install_dependencies(
    run_path: Path,
    *,
    dependency_manager: str,
    env_overrides: Mapping[str, str],
    process_runner: ProcessRunner,
) -> bytes:
    """Run `<dependency_manager> install` in `run_path` and return its output.

    Raises:
      ManifestNotFoundError: If `package.json` does not exist in `run_path`.
      ManifestCheckError: If the manifest check fails with another OS error.
      InstallError: If the install command cannot be spawned or exits non-zero.
    """
    manifest_path = run_path / MANIFEST_FILENAME
    try:
        manifest_path.stat()
    except FileNotFoundError as exc:
        raise ManifestNotFoundError(f"{MANIFEST_FILENAME} file not found: {manifest_path}") from exc
    except OSError as exc:
        raise ManifestCheckError(f"checking {MANIFEST_FILENAME} file: {exc}") from exc

    command = build_install_command(dependency_manager)
    try:
        outcome = process_runner.run(run_path, command, env_overrides)
    except OSError as exc:
        raise InstallError(f"{dependency_manager} install error: {exc}") from exc
    if not outcome.succeeded:
        output_text = outcome.output.decode("utf-8", errors="replace")
        raise InstallError(
            f"{dependency_manager} install error: exit code {outcome.exit_code}\n\n{output_text}",
            output=outcome.output,
        )
    logger.debug("installed dependencies with %s in %s", dependency_manager, run_path)
    return outcome.output
