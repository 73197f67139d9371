"""
Core functionality for tacobuild.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_default_cache_dir,
    get_platform_cache_dir,
    get_plugin_cache_dir,
    get_platform_dir,
    get_plugin_dir,
)

from .exceptions import (
    TacoBuildError,
    CommandError,
    ConfigurationError,
    InvalidVersionError,
    InstallationError,
    ToolchainError,
    PackagingError,
    LockTimeout,
)

from .locking import LockManager

from .process import ProcessExecutor, ProcessResult

from .versions import (
    ToolchainNaming,
    IpaPackaging,
    parse_version,
    classify_toolchain,
    classify_ios_platform,
)

__all__ = [
    "get_default_cache_dir",
    "get_platform_cache_dir",
    "get_plugin_cache_dir",
    "get_platform_dir",
    "get_plugin_dir",
    "TacoBuildError",
    "CommandError",
    "ConfigurationError",
    "InvalidVersionError",
    "InstallationError",
    "ToolchainError",
    "PackagingError",
    "LockTimeout",
    "LockManager",
    "ProcessExecutor",
    "ProcessResult",
    "ToolchainNaming",
    "IpaPackaging",
    "parse_version",
    "classify_toolchain",
    "classify_ios_platform",
]
