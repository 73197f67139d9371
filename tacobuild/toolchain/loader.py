"""
Toolchain loading.

``ToolchainLoader.get_toolchain`` turns the build configuration into a ready
Cordova handle: it resolves the version, installs it into the cache if
needed, points Cordova's own platform and plugin caches into the shared
cache root, and makes sure the team-build support plugin is in the project.
The handle is reused for as long as the resolved version (and the project
and cache locations) stay the same.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from tacobuild.config.project import resolve_version
from tacobuild.config.settings import BuildConfig
from tacobuild.core.directory import get_plugin_dir
from tacobuild.core.exceptions import ToolchainError
from tacobuild.core.process import ProcessExecutor
from tacobuild.toolchain.cache import CacheEntry, ToolchainCache
from tacobuild.toolchain.handle import NodeModuleToolchain, ToolchainHandle

logger = logging.getLogger(__name__)

CORDOVA_HOME_ENV_VAR = "CORDOVA_HOME"
PLUGMAN_HOME_ENV_VAR = "PLUGMAN_HOME"

SUPPORT_PLUGIN_ID = "cordova-plugin-vs-taco-support"
# Installed from a local copy; some Cordova versions fail fetching plugins from git
SUPPORT_PLUGIN_PATH = Path(__file__).parent.parent / "data" / SUPPORT_PLUGIN_ID


class ToolchainLoader:
    """
    Owns the currently loaded toolchain handle for one build configuration.

    Attributes:
        config: Build configuration (read on every call)
        executor: Process executor shared by installs and toolchain calls
        node_command: node executable used to drive the toolchain
        plugin_source: Location of the support plugin to install
        handle: Currently loaded handle, or None
        loaded_version: Version of the loaded handle, or None
    """

    def __init__(
        self,
        config: BuildConfig,
        executor: Optional[ProcessExecutor] = None,
        node_command: str = "node",
        npm_command: Optional[str] = None,
        plugin_source: Path = SUPPORT_PLUGIN_PATH,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.config = config
        self.executor = executor or ProcessExecutor()
        self.node_command = node_command
        self.npm_command = npm_command
        self.plugin_source = Path(plugin_source)
        self.environ = environ

        self.handle: Optional[ToolchainHandle] = None
        self.loaded_version: Optional[str] = None
        self._loaded_key: Optional[Tuple[str, Path, Path]] = None
        self._cache: Optional[ToolchainCache] = None

    @property
    def cache(self) -> ToolchainCache:
        """Cache for the configured cache directory."""
        if self._cache is None or self._cache.cache_root != self.config.cache_directory:
            self._cache = ToolchainCache(
                self.config.cache_directory,
                executor=self.executor,
                npm_command=self.npm_command,
            )
        return self._cache

    def toolchain_environment(self) -> Dict[str, str]:
        """Environment redirecting Cordova's platform and plugin caches."""
        return {
            CORDOVA_HOME_ENV_VAR: str(self.config.platform_cache_dir),
            PLUGMAN_HOME_ENV_VAR: str(self.config.plugin_cache_dir),
        }

    def get_toolchain(self) -> ToolchainHandle:
        """
        Return a ready toolchain handle, installing and loading it if needed.

        Raises:
            InstallationError: If the version cannot be installed
            ToolchainError: If the module cannot be loaded or the support
                plugin cannot be added
        """
        resolved = resolve_version(self.config, self.environ)
        key = (
            resolved.version,
            self.config.project_root,
            self.config.cache_directory,
        )

        if self.handle is not None and self._loaded_key == key:
            logger.debug(f"Cordova {resolved.version} already loaded")
            return self.handle

        entry = self.cache.ensure_installed(resolved.version)
        handle = self.load(entry)
        self.ensure_support_plugin(handle)

        self.handle = handle
        self.loaded_version = resolved.version
        self._loaded_key = key
        return handle

    def load(self, entry: CacheEntry) -> ToolchainHandle:
        """Create a handle for an installed cache entry."""
        if not entry.module_path.is_dir():
            raise ToolchainError(
                f"Cordova {entry.version} module not found at {entry.module_path}. "
                f"Remove {entry.path} to force a reinstall."
            )

        logger.info(f"Loading Cordova {entry.version} from {entry.module_path}")
        return NodeModuleToolchain(
            version=entry.version,
            module_path=entry.module_path,
            project_root=self.config.project_root,
            environment=self.toolchain_environment(),
            nested_attribute=entry.naming.nested_attribute,
            executor=self.executor,
            node_command=self.node_command,
        )

    def ensure_support_plugin(self, handle: ToolchainHandle) -> None:
        """Add the support plugin to the project unless it is already there."""
        if get_plugin_dir(self.config.project_root, SUPPORT_PLUGIN_ID).exists():
            logger.info("Support plugin already added.")
            return

        logger.info("Adding support plugin.")
        handle.install_plugin(str(self.plugin_source))


__all__ = [
    "CORDOVA_HOME_ENV_VAR",
    "PLUGMAN_HOME_ENV_VAR",
    "SUPPORT_PLUGIN_ID",
    "SUPPORT_PLUGIN_PATH",
    "ToolchainLoader",
]
