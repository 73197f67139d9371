"""
Cordova version resolution.

The version used for a project is chosen from, in order:

1. ``toolchain_version`` set through configuration
2. The ``cordova-cli`` field of ``taco.json`` in the project root
3. The ``CORDOVA_DEFAULT_VERSION`` environment variable
4. The built-in default (5.1.1)
"""

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from tacobuild.config.settings import BuildConfig

logger = logging.getLogger(__name__)

DEFAULT_CORDOVA_VERSION = "5.1.1"
DEFAULT_VERSION_ENV_VAR = "CORDOVA_DEFAULT_VERSION"
PROJECT_FILE_NAME = "taco.json"
PROJECT_VERSION_FIELD = "cordova-cli"


class VersionSource(Enum):
    """Where a resolved Cordova version came from."""

    CONFIGURED = "configuration"
    PROJECT_FILE = PROJECT_FILE_NAME
    ENVIRONMENT = DEFAULT_VERSION_ENV_VAR
    DEFAULT = "built-in default"


@dataclass(frozen=True)
class ResolvedVersion:
    """A Cordova version and the source that supplied it."""

    version: str
    source: VersionSource


def read_project_version(project_root: Path) -> Optional[str]:
    """
    Read the pinned Cordova version from taco.json.

    Returns:
        The ``cordova-cli`` value, or None if the file is absent, unreadable,
        or has no usable value.
    """
    project_file = Path(project_root) / PROJECT_FILE_NAME
    if not project_file.is_file():
        return None

    try:
        with open(project_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable {project_file}: {e}")
        return None

    value = data.get(PROJECT_VERSION_FIELD) if isinstance(data, dict) else None
    if not isinstance(value, str) or not value.strip():
        logger.warning(
            f"{project_file} has no \"{PROJECT_VERSION_FIELD}\" version, ignoring it"
        )
        return None
    return value.strip()


def resolve_version(
    config: BuildConfig, environ: Optional[Mapping[str, str]] = None
) -> ResolvedVersion:
    """
    Determine which Cordova version applies to the configured project.

    Args:
        config: Build configuration
        environ: Environment to read the default override from (default: os.environ)

    Returns:
        ResolvedVersion naming the version and its source
    """
    if environ is None:
        environ = os.environ

    if config.toolchain_version:
        resolved = ResolvedVersion(config.toolchain_version, VersionSource.CONFIGURED)
        logger.info(f"Cordova version set to {resolved.version} by configuration")
        return resolved

    project_version = read_project_version(config.project_root)
    if project_version:
        resolved = ResolvedVersion(project_version, VersionSource.PROJECT_FILE)
        logger.info(
            f"Cordova version set to {resolved.version} based on the contents of "
            f"{PROJECT_FILE_NAME}"
        )
        return resolved

    env_version = environ.get(DEFAULT_VERSION_ENV_VAR, "").strip()
    if env_version:
        resolved = ResolvedVersion(env_version, VersionSource.ENVIRONMENT)
        logger.info(
            f"{PROJECT_FILE_NAME} not found. Using default Cordova version of "
            f"{resolved.version} from {DEFAULT_VERSION_ENV_VAR}"
        )
        return resolved

    resolved = ResolvedVersion(DEFAULT_CORDOVA_VERSION, VersionSource.DEFAULT)
    logger.info(
        f"{PROJECT_FILE_NAME} not found. Using default Cordova version of "
        f"{resolved.version}"
    )
    return resolved


__all__ = [
    "DEFAULT_CORDOVA_VERSION",
    "DEFAULT_VERSION_ENV_VAR",
    "PROJECT_FILE_NAME",
    "PROJECT_VERSION_FIELD",
    "VersionSource",
    "ResolvedVersion",
    "read_project_version",
    "resolve_version",
]
