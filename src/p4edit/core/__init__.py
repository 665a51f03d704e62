"""Core layer for p4edit."""

from p4edit.core.config import Config
from p4edit.core.types import (
    ClientRow,
    CommandResult,
    FailureReason,
    ServerInfo,
    ServiceConfig,
    WorkspaceState,
)

__all__ = [
    "ClientRow",
    "CommandResult",
    "Config",
    "FailureReason",
    "ServerInfo",
    "ServiceConfig",
    "WorkspaceState",
]
