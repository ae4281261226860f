"""Project-specific exception types."""

from __future__ import annotations


class AdkupError(RuntimeError):
    """Base error for domain-level adkup failures."""


class MissingToolError(AdkupError):
    """Raised when a required tool is absent and cannot be bootstrapped."""


class InstallError(AdkupError):
    """Raised when the host package manager fails to install or link."""


class VMError(AdkupError):
    """Raised when the Colima VM cannot be started with the declared profile."""


class ConnectivityError(AdkupError):
    """Raised when the Docker daemon is unreachable through the VM."""


class DependencyInstallError(AdkupError):
    """Raised when the sandbox cannot be created or synced from the manifest."""


class SmokeTestError(AdkupError):
    """Raised when a final verification command exits non-zero."""
