"""
Centralized exception hierarchy for tacobuild.

Every failure surfaced by the build pipeline derives from TacoBuildError so
callers can halt a pipeline with a single except clause.
"""

from typing import Optional, Sequence

from filelock import Timeout as LockTimeout


# ============================================================================
# Base Exceptions
# ============================================================================


class TacoBuildError(Exception):
    """Base exception for all tacobuild errors."""

    pass


class CommandError(TacoBuildError):
    """Base exception for failures of an external command."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr or ""

        details = [message]
        if self.command:
            details.append(f"Command: {' '.join(self.command)}")
        if returncode is not None:
            details.append(f"Exit code: {returncode}")
        if self.stderr.strip():
            details.append(f"Error output:\n{self.stderr.strip()}")
        super().__init__("\n".join(details))


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(TacoBuildError):
    """Raised when build configuration is invalid (e.g. missing project root)."""

    pass


class InvalidVersionError(TacoBuildError):
    """Invalid version string."""

    pass


# ============================================================================
# Command Exceptions
# ============================================================================


class InstallationError(CommandError):
    """Raised when installing a toolchain version into the cache fails."""

    pass


class ToolchainError(CommandError):
    """Raised when a delegated toolchain call (platform add, build, plugin add) fails."""

    pass


class PackagingError(CommandError):
    """Raised when the platform packaging command fails."""

    pass


__all__ = [
    "TacoBuildError",
    "CommandError",
    "ConfigurationError",
    "InvalidVersionError",
    "InstallationError",
    "ToolchainError",
    "PackagingError",
    "LockTimeout",
]
