"""
Versioned Cordova toolchain cache.

Each Cordova version is installed once with npm into
``<cache>/<version>/node_modules/<package>`` and reused by every later build
on the machine. An entry counts as installed only once its completion marker
has been written; a version directory without one is the remains of an
interrupted install and is installed again.

Example:
    >>> cache = ToolchainCache(Path.home() / ".cordova-cache")
    >>> entry = cache.ensure_installed("5.1.1")
    >>> print(entry.module_path)
    /home/user/.cordova-cache/5.1.1/node_modules/cordova-lib
"""

import json
import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from tacobuild.core.directory import INSTALL_MARKER, MODULE_CONTAINER, get_lock_dir
from tacobuild.core.exceptions import InstallationError, LockTimeout
from tacobuild.core.filesystem import atomic_write, safe_rmtree
from tacobuild.core.locking import LockManager
from tacobuild.core.process import ProcessExecutor
from tacobuild.core.versions import ToolchainNaming, classify_toolchain

logger = logging.getLogger(__name__)


def default_npm_command() -> str:
    """npm executable for this host (npm.cmd on Windows)."""
    found = shutil.which("npm")
    if found:
        return found
    return "npm.cmd" if os.name == "nt" else "npm"


@dataclass
class CacheEntry:
    """An installed toolchain version in the cache."""

    version: str
    """Cordova version"""

    path: Path
    """Version directory, <cache>/<version>"""

    naming: ToolchainNaming
    """Package naming scheme used for this version"""

    was_cached: bool = False
    """Whether the entry was already installed before this call"""

    @property
    def package_name(self) -> str:
        return self.naming.package_name

    @property
    def module_path(self) -> Path:
        return self.path / MODULE_CONTAINER / self.package_name


class ToolchainCache:
    """
    Installs Cordova versions on first use and reuses them afterwards.

    Attributes:
        cache_root: Cache root directory
        executor: Runs the npm install command
        npm_command: npm executable
        lock_timeout: Seconds to wait for another process installing the same version
    """

    def __init__(
        self,
        cache_root: Path,
        executor: Optional[ProcessExecutor] = None,
        npm_command: Optional[str] = None,
        lock_timeout: float = 600,
    ):
        self.cache_root = Path(cache_root)
        self.executor = executor or ProcessExecutor()
        self.npm_command = npm_command or default_npm_command()
        self.lock_timeout = lock_timeout
        self.lock_manager = LockManager(get_lock_dir(self.cache_root))

    def entry_path(self, version: str) -> Path:
        return self.cache_root / version

    def marker_path(self, version: str) -> Path:
        return self.entry_path(version) / INSTALL_MARKER

    def is_installed(self, version: str) -> bool:
        """Check whether a version has a completed install."""
        return self.marker_path(version).is_file()

    def list_installed(self) -> List[str]:
        """Versions with a completed install, sorted by name."""
        if not self.cache_root.is_dir():
            return []
        return sorted(
            child.name
            for child in self.cache_root.iterdir()
            if child.is_dir() and (child / INSTALL_MARKER).is_file()
        )

    def get_entry(self, version: str, was_cached: bool = True) -> CacheEntry:
        return CacheEntry(
            version=version,
            path=self.entry_path(version),
            naming=classify_toolchain(version),
            was_cached=was_cached,
        )

    def ensure_installed(self, version: str) -> CacheEntry:
        """
        Make sure a Cordova version is installed in the cache.

        Args:
            version: Cordova version (e.g. "5.1.1")

        Returns:
            CacheEntry for the version

        Raises:
            InstallationError: If npm install fails or the install lock times out
            InvalidVersionError: If version is not a version string
        """
        naming = classify_toolchain(version)

        # Another build agent may create the root at the same time
        created = not self.cache_root.is_dir()
        self.cache_root.mkdir(parents=True, exist_ok=True)
        if created:
            logger.info(f"Creating {self.cache_root}")
        logger.info(f"Cordova cache found at {self.cache_root}")

        if self.is_installed(version):
            logger.info(f"Cordova {version} already installed.")
            return self.get_entry(version)

        try:
            with self.lock_manager.install_lock(version, timeout=self.lock_timeout):
                # Another process may have finished while we waited
                if self.is_installed(version):
                    logger.info(f"Cordova {version} installed by another process.")
                    return self.get_entry(version)

                entry_dir = self.entry_path(version)
                if entry_dir.exists():
                    logger.warning(
                        f"Cordova {version} cache entry at {entry_dir} is incomplete "
                        "(interrupted install?). Reinstalling."
                    )
                    safe_rmtree(entry_dir, require_prefix=self.cache_root)

                self._install(version, naming)
        except LockTimeout as e:
            raise InstallationError(
                f"Timed out after {self.lock_timeout}s waiting for another process "
                f"installing Cordova {version} (lock: {e.lock_file})"
            ) from e

        return self.get_entry(version, was_cached=False)

    def _install(self, version: str, naming: ToolchainNaming):
        entry_dir = self.entry_path(version)
        (entry_dir / MODULE_CONTAINER).mkdir(parents=True)
        logger.info(f"Installing Cordova {version}.")

        cmd = [self.npm_command, "install", f"{naming.package_name}@{version}"]

        try:
            result = self.executor.run(cmd, cwd=entry_dir)
        except Exception as e:
            self._cleanup_on_error(entry_dir)
            raise InstallationError(
                f"Failed to execute npm while installing Cordova {version}: {e}",
                command=cmd,
            ) from e

        if not result.ok:
            self._cleanup_on_error(entry_dir)
            raise InstallationError(
                f"Installing Cordova {version} failed",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        marker = {
            "version": version,
            "package": naming.package_name,
            "installed": datetime.now().isoformat(),
        }
        atomic_write(self.marker_path(version), json.dumps(marker, indent=2))
        logger.info(f"Cordova {version} installed at {entry_dir}")

    def _cleanup_on_error(self, entry_dir: Path):
        try:
            safe_rmtree(entry_dir, require_prefix=self.cache_root)
            logger.debug(f"Removed partial installation: {entry_dir}")
        except Exception as e:
            logger.warning(f"Failed to remove partial installation {entry_dir}: {e}")


__all__ = ["CacheEntry", "ToolchainCache", "default_npm_command"]
