"""
Build configuration for tacobuild.

``BuildConfig`` holds the three settings every pipeline operation needs:
where the toolchain cache lives, which Cordova version to use (if pinned),
and which project to build. It starts from environment defaults and is
changed only through ``configure``.

Settings can also come from a YAML file (``tacobuild.yaml``)::

    cache_directory: /opt/cordova-cache
    toolchain_version: 5.1.1
    project_root: ./app
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from tacobuild.core.directory import (
    get_default_cache_dir,
    get_platform_cache_dir,
    get_plugin_cache_dir,
)
from tacobuild.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "tacobuild.yaml"

CONFIG_OPTIONS = ("cache_directory", "toolchain_version", "project_root")


@dataclass
class BuildConfig:
    """
    Settings shared by toolchain setup, build and package operations.

    Attributes:
        cache_directory: Root of the toolchain cache
        project_root: Cordova project to build (must exist)
        toolchain_version: Pinned Cordova version, or None to resolve it
    """

    cache_directory: Path
    project_root: Path
    toolchain_version: Optional[str] = None

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "BuildConfig":
        """Create a config from CORDOVA_CACHE and the current directory."""
        return cls(
            cache_directory=get_default_cache_dir(environ),
            project_root=Path.cwd(),
        )

    @property
    def platform_cache_dir(self) -> Path:
        return get_platform_cache_dir(self.cache_directory)

    @property
    def plugin_cache_dir(self) -> Path:
        return get_plugin_cache_dir(self.cache_directory)

    def configure(self, **options: Any) -> "BuildConfig":
        """
        Apply option overrides.

        Args:
            cache_directory: Override cache root
            toolchain_version: Pin the Cordova version
            project_root: Override project path (must exist)

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: On an unknown option or a missing project path
        """
        unknown = sorted(set(options) - set(CONFIG_OPTIONS))
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(unknown)}. "
                f"Valid options: {', '.join(CONFIG_OPTIONS)}"
            )

        # Nothing is applied unless every option is valid
        cache_directory = self.cache_directory
        if options.get("cache_directory") is not None:
            cache_directory = Path(options["cache_directory"]).expanduser()
        toolchain_version = self.toolchain_version
        if options.get("toolchain_version") is not None:
            toolchain_version = str(options["toolchain_version"]).strip() or None
        project_root = self.project_root
        if options.get("project_root") is not None:
            project_root = Path(options["project_root"]).expanduser().resolve()

        if not project_root.is_dir():
            raise ConfigurationError(
                f'Specified project path does not exist: "{project_root}"'
            )

        self.cache_directory = cache_directory
        self.toolchain_version = toolchain_version
        self.project_root = project_root

        logger.debug(
            f"Configured: project={self.project_root}, cache={self.cache_directory}, "
            f"version={self.toolchain_version or '(resolve)'}"
        )
        return self


def find_settings_file(project_root: Path) -> Optional[Path]:
    """Return the project's tacobuild.yaml if it has one."""
    candidate = Path(project_root) / SETTINGS_FILE_NAME
    return candidate if candidate.is_file() else None


def load_settings_file(settings_file: Path) -> Dict[str, Any]:
    """
    Load configuration options from a YAML settings file.

    Relative paths in the file are taken relative to the file's directory.

    Args:
        settings_file: Path to YAML file

    Returns:
        Options suitable for ``BuildConfig.configure``

    Raises:
        ConfigurationError: If the file is missing, malformed, or has unknown keys
    """
    settings_file = Path(settings_file)
    if not settings_file.is_file():
        raise ConfigurationError(f"Settings file not found: {settings_file}")

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {settings_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {settings_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file {settings_file} must contain a mapping, "
            f"got {type(data).__name__}"
        )

    unknown = sorted(set(data) - set(CONFIG_OPTIONS))
    if unknown:
        raise ConfigurationError(
            f"Unknown setting(s) in {settings_file}: {', '.join(unknown)}"
        )

    base_dir = settings_file.parent
    options: Dict[str, Any] = {}
    for key in ("cache_directory", "project_root"):
        if data.get(key) is not None:
            path = Path(str(data[key])).expanduser()
            options[key] = path if path.is_absolute() else base_dir / path
    if data.get("toolchain_version") is not None:
        options["toolchain_version"] = str(data["toolchain_version"])

    logger.debug(f"Loaded settings from {settings_file}: {options}")
    return options


__all__ = [
    "SETTINGS_FILE_NAME",
    "CONFIG_OPTIONS",
    "BuildConfig",
    "find_settings_file",
    "load_settings_file",
]
