"""
Multi-platform build orchestration.

For each requested platform, in order: add the platform to the project if
it is not there yet. Then build each platform, in order, one at a time.
"""

import logging
from typing import List

from tacobuild.config.settings import BuildConfig
from tacobuild.core.directory import get_platform_dir
from tacobuild.pipeline.call_args import (
    ArgsInput,
    PlatformsInput,
    get_call_args,
    normalize_platforms,
)
from tacobuild.pipeline.sequence import Step, run_steps
from tacobuild.toolchain.handle import ToolchainHandle
from tacobuild.toolchain.loader import ToolchainLoader

logger = logging.getLogger(__name__)


class BuildOrchestrator:
    """
    Builds a Cordova project for one or more platforms.

    Example:
        >>> orchestrator = BuildOrchestrator(config, ToolchainLoader(config))
        >>> orchestrator.build(["android", "ios"], {"android": ["--release"]})
    """

    def __init__(self, config: BuildConfig, loader: ToolchainLoader):
        self.config = config
        self.loader = loader

    def build(self, platforms: PlatformsInput, args: ArgsInput = None) -> None:
        """
        Add missing platforms, then build each platform sequentially.

        Args:
            platforms: Platform name or ordered list of platform names
            args: Options for every platform, or a mapping of platform to options

        Raises:
            InstallationError: If the toolchain cannot be installed
            ToolchainError: If adding a platform or building fails; later
                platforms are not built
        """
        platforms = normalize_platforms(platforms)
        handle = self.loader.get_toolchain()

        self.add_platforms(handle, platforms)

        steps = []
        for platform in platforms:
            call_args = get_call_args(platform, args)
            logger.info(
                f"Queueing build for platform {platform} w/options: "
                f"{' '.join(call_args.options) or 'none'}"
            )
            steps.append(Step(f"build {platform}", handle.build, (call_args,)))
        run_steps(steps)

    def add_platforms(self, handle: ToolchainHandle, platforms: List[str]) -> None:
        """Add each platform that the project does not have yet, in order."""
        run_steps(
            Step(f"add platform {platform}", self._ensure_platform, (handle, platform))
            for platform in platforms
        )

    def _ensure_platform(self, handle: ToolchainHandle, platform: str) -> bool:
        # Checked when the step runs, so a repeated platform is added once
        if get_platform_dir(self.config.project_root, platform).exists():
            logger.info(f"Platform {platform} already added.")
            return False

        logger.info(f"Adding platform {platform}.")
        handle.register_platform(platform)
        return True


__all__ = ["BuildOrchestrator"]
