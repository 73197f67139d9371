"""
External command execution.

Runs a single command to completion with stdout/stderr captured. Used for
npm installs into the toolchain cache, for calls into the cached toolchain
module, and for the iOS packaging command.

Example:
    >>> executor = ProcessExecutor()
    >>> result = executor.run(["npm", "--version"])
    >>> if result.ok:
    ...     print(result.stdout)
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Outcome of a finished command."""

    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessExecutor:
    """
    Runs external commands synchronously with captured output.

    Attributes:
        timeout: Optional timeout in seconds applied to every command
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(
        self,
        command: Sequence[str],
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ProcessResult:
        """
        Run a command to completion.

        Args:
            command: Program and arguments
            cwd: Working directory for the child process
            env: Extra environment variables, merged over os.environ

        Returns:
            ProcessResult with exit code and captured output

        Raises:
            OSError: If the program cannot be started
            subprocess.TimeoutExpired: If the command exceeds the timeout
        """
        cmd = [str(part) for part in command]
        logger.debug(f"Exec: {' '.join(cmd)}" + (f" (cwd={cwd})" if cwd else ""))

        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(cwd) if cwd else None,
            env=_merge_environment(env),
            timeout=self.timeout,
        )

        result = ProcessResult(
            command=cmd,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        log_result(result)
        return result


def _merge_environment(env: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    if not env:
        return None
    merged = dict(os.environ)
    merged.update(env)
    return merged


def log_result(result: ProcessResult) -> None:
    """Send captured output of a finished command to the log."""
    logger.debug(f"Exec complete (exit code {result.returncode}).")
    if result.stdout.strip():
        logger.info(result.stdout.rstrip())
    if result.stderr.strip():
        if result.ok:
            logger.warning(result.stderr.rstrip())
        else:
            logger.error(result.stderr.rstrip())


__all__ = ["ProcessExecutor", "ProcessResult", "log_result"]
