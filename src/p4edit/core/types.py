"""Type definitions for p4edit."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from p4edit.core.constant import COMMAND_TIMEOUT_DEFAULT, P4CONFIG_CLIENT_KEYS
from p4edit.core.errors import (
    CommandFailedError,
    CommandTimeoutError,
    NoClientBindingError,
    NoWorkspaceFolderError,
    ProcessLaunchError,
)
from p4edit.core.paths import default_config_filenames, default_program


class FailureReason(Enum):
    """Why a command invocation failed."""

    EXIT_CODE = "exit_code"
    TIMEOUT = "timeout"
    LAUNCH = "launch"
    NO_WORKSPACE_FOLDER = "no_workspace_folder"
    NO_CLIENT_BINDING = "no_client_binding"


class WorkspaceState(Enum):
    """Resolution state of a workspace root."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    BOUND = "bound"
    FAILED = "failed"


@dataclass
class CommandResult:
    """Outcome of one p4 invocation."""

    failed: bool
    stdout: str
    stderr: str
    exit_code: int | None = None
    args: list[str] = field(default_factory=list)
    reason: FailureReason | None = None

    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> "CommandResult":
        """Create a failed result for a command that never produced an exit code.

        Args:
            reason: Failure reason.
            message: Text reported as stderr.

        Returns:
            Failed CommandResult.
        """
        return cls(failed=True, stdout="", stderr=message, reason=reason)

    @property
    def output(self) -> str:
        """Get stdout followed by stderr."""
        return self.stdout + self.stderr

    def raise_for_failure(self) -> None:
        """Raise the exception matching this result's failure reason.

        Raises:
            NoWorkspaceFolderError: No workspace root for the working directory.
            NoClientBindingError: Client-scoped command without a binding.
            ProcessLaunchError: The program could not be started.
            CommandTimeoutError: The command timed out.
            CommandFailedError: The command exited with a non-zero status.
        """
        if not self.failed:
            return

        message = self.stderr.strip() or "p4 command failed"
        if self.reason is FailureReason.NO_WORKSPACE_FOLDER:
            raise NoWorkspaceFolderError(message)
        if self.reason is FailureReason.NO_CLIENT_BINDING:
            raise NoClientBindingError(message)
        if self.reason is FailureReason.LAUNCH:
            raise ProcessLaunchError(message)
        if self.reason is FailureReason.TIMEOUT:
            raise CommandTimeoutError(message, self.stderr, self.exit_code)
        raise CommandFailedError(message, self.stderr, self.exit_code)


class ServerInfo(BaseModel):
    """Parsed output of `p4 info`. Fields absent from the output stay None."""

    user_name: str | None = None
    client_name: str | None = None
    client_host: str | None = None
    client_root: str | None = None
    current_directory: str | None = None
    peer_address: str | None = None
    client_address: str | None = None
    server_address: str | None = None
    server_root: str | None = None
    server_date: str | None = None
    server_uptime: str | None = None
    server_version: str | None = None
    server_id: str | None = None
    server_services: list[str] | None = None
    server_license: str | None = None
    server_license_ip: str | None = None
    case_handling: str | None = None

    model_config = {"extra": "forbid"}

    @property
    def is_empty(self) -> bool:
        """Check whether no field was set."""
        return not self.model_fields_set


class ClientRow(BaseModel):
    """One client entry from `p4 clients`."""

    client: str
    root: str
    host: str

    model_config = {"extra": "forbid", "frozen": True}


class ServiceConfig(BaseModel):
    """Runtime configuration for the p4edit service."""

    program: str = Field(default_factory=default_program)
    global_args: list[str] = Field(default_factory=list)
    config_filenames: list[str] = Field(default_factory=default_config_filenames)
    client_keys: list[str] = Field(default_factory=lambda: list(P4CONFIG_CLIENT_KEYS))
    command_timeout: float | None = COMMAND_TIMEOUT_DEFAULT
    log_file: Path | None = None

    model_config = {"extra": "forbid"}
