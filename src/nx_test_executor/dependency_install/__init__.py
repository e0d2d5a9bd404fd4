"""Dependency installation exports."""

from .dependency_installer import (
    MANIFEST_FILENAME,
    DependencyInstallError,
    InstallError,
    ManifestCheckError,
    ManifestNotFoundError,
    install_dependencies,
)

__all__ = [
    "MANIFEST_FILENAME",
    "DependencyInstallError",
    "InstallError",
    "ManifestCheckError",
    "ManifestNotFoundError",
    "install_dependencies",
]
