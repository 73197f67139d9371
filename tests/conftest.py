"""
Pytest configuration and shared fixtures for tacobuild tests.

No test runs real npm, node or xcrun: ``FakeCordovaExecutor`` stands in for
the process executor and creates the files those tools would create.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from tacobuild.config.settings import BuildConfig
from tacobuild.core.exceptions import ToolchainError
from tacobuild.core.process import ProcessExecutor, ProcessResult
from tacobuild.toolchain.handle import CallArgs, ToolchainHandle
from tacobuild.toolchain.loader import SUPPORT_PLUGIN_ID


# ============================================================================
# Fakes
# ============================================================================


@dataclass
class RecordedCommand:
    """A command seen by FakeCordovaExecutor."""

    command: List[str]
    cwd: Optional[Path]
    env: Dict[str, str] = field(default_factory=dict)


class FakeCordovaExecutor(ProcessExecutor):
    """
    Process executor that simulates npm, the Cordova bridge and xcrun.

    Every command is recorded and summarized as an event string such as
    ``"npm install cordova-lib@5.1.1"``, ``"platform add ios"``,
    ``"build android --release"``, ``"plugin add"`` or ``"xcrun"``.
    Events listed in ``failures`` return exit code 1 with the mapped stderr.
    """

    def __init__(self, project_root: Path):
        super().__init__()
        self.project_root = Path(project_root)
        self.commands: List[RecordedCommand] = []
        self.events: List[str] = []
        self.failures: Dict[str, str] = {}

    def run(self, command, cwd=None, env=None) -> ProcessResult:
        cmd = [str(part) for part in command]
        self.commands.append(
            RecordedCommand(cmd, Path(cwd) if cwd else None, dict(env or {}))
        )
        event = self.describe(cmd)
        self.events.append(event)

        if event in self.failures:
            return ProcessResult(cmd, 1, "", self.failures[event])

        self._simulate(cmd, cwd)
        return ProcessResult(cmd, 0, "", "")

    @staticmethod
    def describe(cmd: List[str]) -> str:
        program = Path(cmd[0]).name
        if program.startswith("npm"):
            return " ".join(["npm"] + cmd[1:])
        if program == "xcrun":
            return "xcrun"
        if len(cmd) > 5 and cmd[1].endswith("cordova_bridge.js"):
            command, args = cmd[4], json.loads(cmd[5])
            if command == "build":
                call_args = args[0]
                return " ".join(
                    ["build"] + call_args["platforms"] + call_args["options"]
                )
            if command == "platform":
                return f"platform {args[0]} {args[1]}"
            if command == "plugin":
                return f"plugin {args[0]}"
        return " ".join(cmd)

    def _simulate(self, cmd: List[str], cwd):
        event = self.describe(cmd)
        if event.startswith("npm install"):
            package = cmd[-1].rsplit("@", 1)[0]
            (Path(cwd) / "node_modules" / package).mkdir(parents=True, exist_ok=True)
        elif event.startswith("platform add"):
            platform = event.split()[-1]
            (self.project_root / "platforms" / platform).mkdir(
                parents=True, exist_ok=True
            )
        elif event == "plugin add":
            (self.project_root / "plugins" / SUPPORT_PLUGIN_ID).mkdir(
                parents=True, exist_ok=True
            )
        elif event == "xcrun":
            Path(cmd[cmd.index("-o") + 1]).write_text("ipa")

    def count(self, prefix: str) -> int:
        return sum(1 for event in self.events if event.startswith(prefix))


class RecordingToolchain(ToolchainHandle):
    """Toolchain handle that records calls into a shared event list."""

    def __init__(
        self,
        events: List[str],
        project_root: Optional[Path] = None,
        version: str = "5.1.1",
        fail_on: Optional[str] = None,
    ):
        super().__init__(version)
        self.events = events
        self.project_root = project_root
        self.fail_on = fail_on

    def _record(self, event: str):
        self.events.append(event)
        if event == self.fail_on:
            raise ToolchainError(f"simulated failure: {event}")

    def register_platform(self, platform: str) -> None:
        self._record(f"register {platform}")
        if self.project_root is not None:
            (self.project_root / "platforms" / platform).mkdir(parents=True)

    def build(self, call_args: CallArgs) -> None:
        self._record(" ".join(["build"] + call_args.platforms + call_args.options))

    def install_plugin(self, source: str) -> None:
        self._record("install plugin")


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the host's Cordova settings out of every test."""
    monkeypatch.delenv("CORDOVA_CACHE", raising=False)
    monkeypatch.delenv("CORDOVA_DEFAULT_VERSION", raising=False)
    monkeypatch.delenv("CORDOVA_HOME", raising=False)
    monkeypatch.delenv("PLUGMAN_HOME", raising=False)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Empty Cordova project directory."""
    project = tmp_path / "app"
    project.mkdir()
    return project


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """Cache root location (not created)."""
    return tmp_path / "cordova-cache"


@pytest.fixture
def config(project_dir, cache_dir) -> BuildConfig:
    return BuildConfig(cache_directory=cache_dir, project_root=project_dir)


@pytest.fixture
def fake_executor(project_dir) -> FakeCordovaExecutor:
    return FakeCordovaExecutor(project_dir)


@pytest.fixture
def events() -> List[str]:
    return []


@pytest.fixture
def make_toolchain(events, project_dir):
    """Factory for RecordingToolchain handles sharing the ``events`` list."""

    def factory(fail_on: Optional[str] = None, version: str = "5.1.1"):
        return RecordingToolchain(events, project_dir, version=version, fail_on=fail_on)

    return factory
