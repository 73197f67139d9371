"""
tacobuild - cached, version-pinned Cordova builds for build servers.

Resolves the Cordova version a project needs, installs it into a shared
cache on first use, and drives platform add, build and iOS packaging steps
strictly in order.
"""

__version__ = "0.1.0"

from tacobuild.config.settings import BuildConfig
from tacobuild.core.exceptions import (
    TacoBuildError,
    ConfigurationError,
    InstallationError,
    ToolchainError,
    PackagingError,
)
from tacobuild.session import (
    TeamBuild,
    get_default_session,
    reset_default_session,
    configure,
    setup_toolchain,
    build,
    package,
)

__all__ = [
    "__version__",
    "BuildConfig",
    "TacoBuildError",
    "ConfigurationError",
    "InstallationError",
    "ToolchainError",
    "PackagingError",
    "TeamBuild",
    "get_default_session",
    "reset_default_session",
    "configure",
    "setup_toolchain",
    "build",
    "package",
]
