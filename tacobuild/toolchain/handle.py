"""
Toolchain handle: the capability interface the pipeline drives.

Cordova's JavaScript API changed shape across versions (``cordova-lib``
nests the toolchain under ``.cordova``). ``NodeModuleToolchain`` absorbs
those differences once, when it is created, so build and package code only
sees ``register_platform``, ``build`` and ``install_plugin``.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from tacobuild.core.exceptions import ToolchainError
from tacobuild.core.process import ProcessExecutor

logger = logging.getLogger(__name__)

BRIDGE_SCRIPT = Path(__file__).parent.parent / "data" / "cordova_bridge.js"


@dataclass
class CallArgs:
    """Arguments for a single-platform toolchain call."""

    platforms: List[str]
    options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"platforms": list(self.platforms), "options": list(self.options)}


class ToolchainHandle(ABC):
    """A loaded Cordova toolchain."""

    def __init__(self, version: str):
        self.version = version

    @abstractmethod
    def register_platform(self, platform: str) -> None:
        """Add a platform to the project (``cordova platform add``)."""
        pass

    @abstractmethod
    def build(self, call_args: CallArgs) -> None:
        """Build the project for the platform(s) in call_args."""
        pass

    @abstractmethod
    def install_plugin(self, source: str) -> None:
        """Add a plugin to the project from an id, URL or local path."""
        pass


class NodeModuleToolchain(ToolchainHandle):
    """
    Handle for a Cordova npm module installed in the cache.

    Each call runs the bundled node bridge, which loads the module, unwraps
    the nested toolchain attribute when present, and invokes the matching
    ``raw`` command. Calls run in the project root with the cache
    environment (CORDOVA_HOME, PLUGMAN_HOME) applied.

    Attributes:
        module_path: Installed module directory
        nested_attribute: Attribute holding the toolchain, if any
        project_root: Working directory for toolchain calls
        environment: Extra environment for toolchain calls
    """

    def __init__(
        self,
        version: str,
        module_path: Path,
        project_root: Path,
        environment: Optional[Mapping[str, str]] = None,
        nested_attribute: Optional[str] = None,
        executor: Optional[ProcessExecutor] = None,
        node_command: str = "node",
        bridge_script: Path = BRIDGE_SCRIPT,
    ):
        super().__init__(version)
        self.module_path = Path(module_path)
        self.project_root = Path(project_root)
        self.environment = dict(environment or {})
        self.nested_attribute = nested_attribute
        self.executor = executor or ProcessExecutor()
        self.node_command = node_command
        self.bridge_script = Path(bridge_script)

    def register_platform(self, platform: str) -> None:
        self._call("platform", "add", platform)

    def build(self, call_args: CallArgs) -> None:
        self._call("build", call_args.to_dict())

    def install_plugin(self, source: str) -> None:
        self._call("plugin", "add", str(source))

    def _call(self, command: str, *args: Any) -> None:
        cmd = [
            self.node_command,
            str(self.bridge_script),
            str(self.module_path),
            self.nested_attribute or "-",
            command,
            json.dumps(list(args)),
        ]

        try:
            result = self.executor.run(
                cmd, cwd=self.project_root, env=self.environment
            )
        except Exception as e:
            raise ToolchainError(
                f"Failed to run Cordova {self.version} '{command}': {e}",
                command=cmd,
            ) from e

        if not result.ok:
            raise ToolchainError(
                f"Cordova {self.version} '{command}' failed",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

    def __repr__(self) -> str:
        return f"NodeModuleToolchain(version={self.version!r}, module_path={str(self.module_path)!r})"


__all__ = ["BRIDGE_SCRIPT", "CallArgs", "ToolchainHandle", "NodeModuleToolchain"]
