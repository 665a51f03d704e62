"""Pytest fixtures and configuration."""

import shutil
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Generator

import pytest

from p4edit.core.types import CommandResult, FailureReason, ServiceConfig
from p4edit.perforce.executor import PerforceExecutor
from p4edit.workspace.registry import WorkspaceRegistry

FAKE_P4_SCRIPT = '''\
import sys

ROOT = {root!r}
args = sys.argv[1:]
client = None
if args[:1] == ["-c"]:
    client = args[1]
    args = args[2:]

command = args[0]
if command == "info":
    print("User name: bob")
    print("Client name: bob-ws")
    print("Client host: devbox")
    print("Client root: " + ROOT)
    print("Server services: standard commit")
elif command == "clients":
    print("other-ws;/elsewhere;devbox")
    print("bob-ws;" + ROOT + ";devbox")
elif command == "edit":
    if client is None:
        sys.stderr.write("Client unknown\\n")
        sys.exit(1)
    print(args[1] + "#1 - opened for edit")
else:
    sys.stderr.write("Unknown command\\n")
    sys.exit(1)
'''


@pytest.fixture(autouse=True)
def clear_p4_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's Perforce environment out of tests."""
    for name in ("P4CONFIG", "P4CLIENT", "P4PORT", "P4USER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def registry() -> WorkspaceRegistry:
    """Create an empty workspace registry."""
    return WorkspaceRegistry()


class FakeExecutor(PerforceExecutor):
    """Executor that answers from canned results instead of launching p4."""

    def __init__(self, registry: WorkspaceRegistry) -> None:
        super().__init__(registry, ServiceConfig(program="p4"))
        self.responses: dict[str, CommandResult] = {}
        self.calls: list[tuple[Path, str, list[str], str | None]] = []

    def respond(self, command: str, stdout: str = "", failed: bool = False) -> None:
        """Set the result returned for a command."""
        self.responses[command] = CommandResult(
            failed=failed,
            stdout="" if failed else stdout,
            stderr=stdout if failed else "",
            exit_code=1 if failed else 0,
            reason=FailureReason.EXIT_CODE if failed else None,
        )

    @property
    def commands(self) -> list[str]:
        """Get the names of the commands run so far."""
        return [call[1] for call in self.calls]

    async def run(
        self,
        cwd: str | Path,
        command: str,
        args: Sequence[str] = (),
        global_args: Sequence[str] = (),
        client: str | None = None,
    ) -> CommandResult:
        self.calls.append((Path(cwd), command, list(args), client))
        if command not in self.responses:
            return CommandResult(
                failed=True,
                stdout="",
                stderr=f"unexpected command {command}",
                exit_code=1,
                reason=FailureReason.EXIT_CODE,
            )
        return self.responses[command]


@pytest.fixture
def fake_executor(registry: WorkspaceRegistry) -> FakeExecutor:
    """Create an executor that records calls and returns canned output."""
    return FakeExecutor(registry)


@pytest.fixture
def p4_root(temp_dir: Path) -> Path:
    """Create the client root served by the fake p4 script."""
    root = temp_dir / "ws"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def fake_p4_config(temp_dir: Path, p4_root: Path) -> ServiceConfig:
    """ServiceConfig that runs a Python script standing in for p4."""
    script = temp_dir / "fake_p4.py"
    script.write_text(FAKE_P4_SCRIPT.format(root=str(p4_root)), encoding="utf-8")
    return ServiceConfig(
        program=sys.executable,
        global_args=[str(script)],
        command_timeout=30,
    )
