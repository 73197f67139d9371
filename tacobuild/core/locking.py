"""
Cross-process locking for the toolchain cache.

Two build agents sharing one cache directory must not run ``npm install``
into the same version directory at once. A per-version file lock (via the
``filelock`` library) serializes installs; the cache re-checks the install
marker after acquiring it.

Usage:
    from tacobuild.core.locking import LockManager

    lock_manager = LockManager(cache_root / "_locks")
    with lock_manager.install_lock("5.1.1", timeout=600):
        # Install or reuse the version directory
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages install locks for one cache directory.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        self.lock_dir = Path(lock_dir)

    def lock_path(self, version: str) -> Path:
        # Sanitize version to create valid filename
        safe_id = version.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f"install-{safe_id}.lock"

    @contextmanager
    def install_lock(self, version: str, timeout: float = 600):
        """
        Acquire the lock for installing one toolchain version.

        Args:
            version: Toolchain version being installed
            timeout: Maximum wait time in seconds (npm installs are slow)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock_path = self.lock_path(version)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired install lock: {lock_path}")
                yield
                logger.debug(f"Released install lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire install lock for Cordova {version} after {timeout}s. "
                "Another process may be installing this version."
            )
            raise LockTimeout(str(lock_path)) from e


__all__ = ["LockManager", "LockTimeout"]
