"""
File system helpers for the toolchain cache.

- Atomic writes for install markers (temp file + rename)
- Guarded recursive deletion for interrupted or failed installs
"""

import os
import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import Optional, Union

from tacobuild.core.exceptions import TacoBuildError

IS_WINDOWS = os.name == "nt"


class FilesystemError(TacoBuildError):
    """Raised when a file system operation fails."""

    pass


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never observed in a partially-written state; if the write
    fails the original file (if any) remains unchanged.

    Example:
        >>> atomic_write('marker.json', '{"version": "5.1.1"}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory so the rename stays on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def _make_writable_and_retry(func, path, _exc):
    # npm can leave read-only files behind on Windows
    os.chmod(path, stat.S_IWRITE)
    func(path)


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a directory tree, refusing to touch anything outside require_prefix.

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/home/me/.cordova-cache/5.1.1', require_prefix='/home/me/.cordova-cache')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        prefix = Path(require_prefix).resolve()
        if path == prefix or prefix not in path.parents:
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:
            if sys.version_info >= (3, 12):
                shutil.rmtree(path, onexc=_make_writable_and_retry)
            else:
                shutil.rmtree(path, onerror=_make_writable_and_retry)
        else:
            shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


__all__ = ["FilesystemError", "atomic_write", "safe_rmtree"]
