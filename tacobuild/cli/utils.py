"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path
from typing import Dict, List, Sequence

from tacobuild.config.settings import find_settings_file, load_settings_file
from tacobuild.core.exceptions import ConfigurationError
from tacobuild.session import TeamBuild

logger = logging.getLogger(__name__)


def create_session(args) -> TeamBuild:
    """
    Create a configured session from parsed arguments.

    Settings file values apply first; command-line options override them.

    Raises:
        ConfigurationError: If the settings file or the project path is invalid
    """
    project_root = Path(args.project_root) if args.project_root else Path.cwd()

    settings_file = args.config or find_settings_file(project_root)
    options = load_settings_file(settings_file) if settings_file else {}

    if args.project_root:
        options["project_root"] = args.project_root
    if args.cache_dir:
        options["cache_directory"] = args.cache_dir
    if args.cordova_version:
        options["toolchain_version"] = args.cordova_version

    session = TeamBuild()
    session.configure(**options)
    return session


def parse_platform_options(
    platforms: Sequence[str], option_items: Sequence[str]
) -> Dict[str, List[str]]:
    """
    Group ``PLATFORM=OPTION`` items by platform.

    Example:
        >>> parse_platform_options(["android", "ios"], ["android=--release"])
        {'android': ['--release'], 'ios': []}

    Raises:
        ConfigurationError: If an item is malformed or names an unrequested platform
    """
    grouped: Dict[str, List[str]] = {platform: [] for platform in platforms}
    for item in option_items:
        platform, sep, option = item.partition("=")
        if not sep or not platform or not option:
            raise ConfigurationError(
                f"Invalid option '{item}', expected PLATFORM=OPTION"
            )
        if platform not in grouped:
            raise ConfigurationError(
                f"Option '{item}' is for platform '{platform}', which was not requested"
            )
        grouped[platform].append(option)
    return grouped
