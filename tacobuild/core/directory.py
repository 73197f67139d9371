"""
Cache directory layout for tacobuild.

Directory Structure:
    Cache root (~/.cordova-cache/ or %APPDATA%\\cordova-cache\\):
        - <version>/node_modules/<package> : Installed Cordova toolchains
        - <version>/.tacobuild-installed    : Completion marker for an install
        - _cordovaPlatformCache/            : CORDOVA_HOME for all toolchains
        - _pluginCache/                     : PLUGMAN_HOME for all toolchains
        - _locks/                           : Install lock files

    Project root:
        - taco.json                   : Optional, pins "cordova-cli"
        - platforms/<platform>/       : Present once a platform is added
        - plugins/<plugin-id>/        : Present once a plugin is added
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from tacobuild.core.exceptions import ConfigurationError

CACHE_ENV_VAR = "CORDOVA_CACHE"

MODULE_CONTAINER = "node_modules"
INSTALL_MARKER = ".tacobuild-installed"
PLATFORM_CACHE_DIR = "_cordovaPlatformCache"
PLUGIN_CACHE_DIR = "_pluginCache"
LOCK_DIR = "_locks"


def get_default_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the toolchain cache root.

    Returns:
        Path: CORDOVA_CACHE if set, otherwise
            - Windows: %APPDATA%\\cordova-cache
            - Linux/macOS: ~/.cordova-cache

    Raises:
        ConfigurationError: On Windows without APPDATA and no override.
    """
    if environ is None:
        environ = os.environ

    override = environ.get(CACHE_ENV_VAR)
    if override:
        return Path(override)

    if os.name == "nt":
        app_data = environ.get("APPDATA")
        if not app_data:
            raise ConfigurationError(
                "APPDATA environment variable is not set. "
                f"Set {CACHE_ENV_VAR} to choose a cache directory."
            )
        return Path(app_data) / "cordova-cache"
    return Path.home() / ".cordova-cache"


def get_platform_cache_dir(cache_root: Path) -> Path:
    return Path(cache_root) / PLATFORM_CACHE_DIR


def get_plugin_cache_dir(cache_root: Path) -> Path:
    return Path(cache_root) / PLUGIN_CACHE_DIR


def get_lock_dir(cache_root: Path) -> Path:
    return Path(cache_root) / LOCK_DIR


def get_platform_dir(project_root: Path, platform: str) -> Path:
    """Directory that exists once ``platform`` has been added to the project."""
    return Path(project_root) / "platforms" / platform


def get_plugin_dir(project_root: Path, plugin_id: str) -> Path:
    """Directory that exists once plugin ``plugin_id`` has been added."""
    return Path(project_root) / "plugins" / plugin_id


__all__ = [
    "CACHE_ENV_VAR",
    "MODULE_CONTAINER",
    "INSTALL_MARKER",
    "PLATFORM_CACHE_DIR",
    "PLUGIN_CACHE_DIR",
    "LOCK_DIR",
    "get_default_cache_dir",
    "get_platform_cache_dir",
    "get_plugin_cache_dir",
    "get_lock_dir",
    "get_platform_dir",
    "get_plugin_dir",
]
