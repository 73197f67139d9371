"""
Configuration for tacobuild: build settings and Cordova version resolution.
"""

from .settings import (
    BuildConfig,
    find_settings_file,
    load_settings_file,
)
from .project import (
    DEFAULT_CORDOVA_VERSION,
    VersionSource,
    ResolvedVersion,
    read_project_version,
    resolve_version,
)

__all__ = [
    "BuildConfig",
    "find_settings_file",
    "load_settings_file",
    "DEFAULT_CORDOVA_VERSION",
    "VersionSource",
    "ResolvedVersion",
    "read_project_version",
    "resolve_version",
]
