"""
Team build session: configure once, then set up, build and package.

``TeamBuild`` is the context object threaded through every operation. It
owns the build configuration, the loaded toolchain and the process
executor. The module-level functions operate on a default session created
on first use, for scripts that build a single project.

Example:
    >>> from tacobuild import TeamBuild
    >>> session = TeamBuild()
    >>> session.configure(project_root="/tmp/app", toolchain_version="5.1.1")
    >>> session.build(["android", "ios"], {"android": ["--release"], "ios": []})
    >>> session.package("ios")
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from tacobuild.config.settings import BuildConfig
from tacobuild.core.process import ProcessExecutor
from tacobuild.pipeline.build import BuildOrchestrator
from tacobuild.pipeline.call_args import ArgsInput, PlatformsInput
from tacobuild.pipeline.package import PackageOrchestrator
from tacobuild.toolchain.handle import ToolchainHandle
from tacobuild.toolchain.loader import ToolchainLoader

logger = logging.getLogger(__name__)


class TeamBuild:
    """
    Context for building one Cordova project.

    Attributes:
        config: Build configuration
        executor: Runs npm, node and xcrun
        loader: Installs and loads the Cordova toolchain
    """

    def __init__(
        self,
        config: Optional[BuildConfig] = None,
        executor: Optional[ProcessExecutor] = None,
        node_command: str = "node",
        npm_command: Optional[str] = None,
    ):
        self.config = config or BuildConfig.from_environment()
        self.executor = executor or ProcessExecutor()
        self.loader = ToolchainLoader(
            self.config,
            executor=self.executor,
            node_command=node_command,
            npm_command=npm_command,
        )
        self.builder = BuildOrchestrator(self.config, self.loader)
        self.packager = PackageOrchestrator(self.config, self.loader, self.executor)

    def configure(self, **options: Any) -> BuildConfig:
        """
        Set cache_directory, toolchain_version and/or project_root.

        Raises:
            ConfigurationError: If project_root does not exist
        """
        return self.config.configure(**options)

    def setup_toolchain(self, **options: Any) -> ToolchainHandle:
        """Apply options (if any), then install and load the toolchain."""
        if options:
            self.configure(**options)
        return self.loader.get_toolchain()

    def build(self, platforms: PlatformsInput, args: ArgsInput = None) -> None:
        """Add missing platforms and build each platform, in order."""
        self.builder.build(platforms, args)

    def package(self, platforms: PlatformsInput, args: ArgsInput = None) -> List[Path]:
        """Run packaging steps (iOS ipa creation) and return the packages created."""
        return self.packager.package(platforms, args)


_default_session: Optional[TeamBuild] = None


def get_default_session() -> TeamBuild:
    """Return the module-level session, creating it on first use."""
    global _default_session
    if _default_session is None:
        _default_session = TeamBuild()
    return _default_session


def reset_default_session() -> None:
    """Forget the module-level session (its loaded toolchain included)."""
    global _default_session
    _default_session = None


def configure(**options: Any) -> BuildConfig:
    return get_default_session().configure(**options)


def setup_toolchain(**options: Any) -> ToolchainHandle:
    return get_default_session().setup_toolchain(**options)


def build(platforms: PlatformsInput, args: ArgsInput = None) -> None:
    get_default_session().build(platforms, args)


def package(platforms: PlatformsInput, args: ArgsInput = None) -> List[Path]:
    return get_default_session().package(platforms, args)


__all__ = [
    "TeamBuild",
    "get_default_session",
    "reset_default_session",
    "configure",
    "setup_toolchain",
    "build",
    "package",
]
