"""
Post-build packaging.

Only iOS needs a separate packaging step, and only for cordova-ios versions
older than 3.9.0; newer versions produce the .ipa during build.
"""

import logging
from pathlib import Path
from typing import List, Optional

from tacobuild.config.settings import BuildConfig
from tacobuild.core.directory import get_platform_dir
from tacobuild.core.exceptions import InvalidVersionError, PackagingError
from tacobuild.core.process import ProcessExecutor
from tacobuild.core.versions import IpaPackaging, classify_ios_platform
from tacobuild.pipeline.call_args import (
    ArgsInput,
    PlatformsInput,
    get_call_args,
    normalize_platforms,
)
from tacobuild.pipeline.sequence import Step, run_steps
from tacobuild.toolchain.loader import ToolchainLoader

logger = logging.getLogger(__name__)

IOS_PLATFORM = "ios"

# The VERSION file is missing from cordova-ios 4.0.0-dev onwards
ASSUMED_IOS_PLATFORM_VERSION = "4.0.0"

DEVICE_APP_GLOB = "*.app"


def get_ios_version_file(project_root: Path) -> Path:
    return get_platform_dir(project_root, IOS_PLATFORM) / "CordovaLib" / "VERSION"


def get_ios_platform_version(project_root: Path) -> str:
    """
    Installed cordova-ios version, from platforms/ios/CordovaLib/VERSION.

    Raises:
        PackagingError: If the VERSION file cannot be read
    """
    version_file = get_ios_version_file(project_root)
    if not version_file.is_file():
        return ASSUMED_IOS_PLATFORM_VERSION

    try:
        version = "".join(version_file.read_text(encoding="utf-8").split())
    except (OSError, UnicodeDecodeError) as e:
        raise PackagingError(
            f"Cannot read cordova-ios version from {version_file}: {e}"
        ) from e
    return version or ASSUMED_IOS_PLATFORM_VERSION


def get_device_build_dir(project_root: Path) -> Path:
    return get_platform_dir(project_root, IOS_PLATFORM) / "build" / "device"


def find_device_apps(project_root: Path) -> List[Path]:
    """Built .app bundles in the iOS device build output."""
    build_dir = get_device_build_dir(project_root)
    if not build_dir.is_dir():
        return []
    return sorted(build_dir.glob(DEVICE_APP_GLOB))


def create_ipa(
    config: BuildConfig,
    args: ArgsInput = None,
    executor: Optional[ProcessExecutor] = None,
) -> Optional[Path]:
    """
    Package the iOS device build as an .ipa with xcrun.

    Args:
        config: Build configuration
        args: Extra xcrun options (flat list or mapping with an "ios" entry)
        executor: Process executor

    Returns:
        Path of the created .ipa, or None if packaging was skipped

    Raises:
        PackagingError: If the cordova-ios version is unreadable or xcrun fails
    """
    ios_version = get_ios_platform_version(config.project_root)
    try:
        ipa_packaging = classify_ios_platform(ios_version)
    except InvalidVersionError as e:
        raise PackagingError(
            f"Invalid cordova-ios version {ios_version!r} in "
            f"{get_ios_version_file(config.project_root)}"
        ) from e

    if ipa_packaging is IpaPackaging.AUTO_PACKAGED:
        logger.info(
            f"Skipping packaging. Detected cordova-ios version {ios_version} "
            "that auto-creates ipa."
        )
        return None

    apps = find_device_apps(config.project_root)
    if len(apps) != 1:
        logger.warning(
            f"Skipping packaging. Expected one device .app - found {len(apps)}"
        )
        return None

    app = apps[0]
    ipa = app.parent / f"{app.stem}.ipa"
    cmd = ["xcrun", "-sdk", "iphoneos", "PackageApplication", str(app), "-o", str(ipa)]
    cmd.extend(get_call_args(IOS_PLATFORM, args).options)

    logger.info(f"Exec: {' '.join(cmd)}")
    executor = executor or ProcessExecutor()
    try:
        result = executor.run(cmd, cwd=config.project_root)
    except Exception as e:
        raise PackagingError(f"Failed to execute xcrun: {e}", command=cmd) from e

    if not result.ok:
        raise PackagingError(
            f"Packaging {app.name} failed",
            command=cmd,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    logger.info(f"Created {ipa}")
    return ipa


def _note_no_package_step(platform: str) -> None:
    logger.info(f"Platform {platform} does not require a separate package step.")


class PackageOrchestrator:
    """Runs platform-specific packaging for each requested platform, in order."""

    def __init__(
        self,
        config: BuildConfig,
        loader: ToolchainLoader,
        executor: Optional[ProcessExecutor] = None,
    ):
        self.config = config
        self.loader = loader
        self.executor = executor or loader.executor

    def package(self, platforms: PlatformsInput, args: ArgsInput = None) -> List[Path]:
        """
        Package each platform that needs a separate packaging step.

        Args:
            platforms: Platform name or ordered list of platform names
            args: Extra packaging options

        Returns:
            Packages created, in order

        Raises:
            PackagingError: If packaging fails; later platforms are not packaged
        """
        platforms = normalize_platforms(platforms)
        self.loader.get_toolchain()

        steps = []
        for platform in platforms:
            if platform == IOS_PLATFORM:
                steps.append(
                    Step("create ipa", create_ipa, (self.config, args, self.executor))
                )
            else:
                steps.append(
                    Step(f"skip packaging {platform}", _note_no_package_step, (platform,))
                )

        return [package for package in run_steps(steps) if package is not None]


__all__ = [
    "IOS_PLATFORM",
    "ASSUMED_IOS_PLATFORM_VERSION",
    "get_ios_platform_version",
    "find_device_apps",
    "create_ipa",
    "PackageOrchestrator",
]
