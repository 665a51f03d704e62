"""p4edit - Perforce workspace resolution and edit-on-save support.

This package finds the Perforce client that owns a directory and opens
read-only files for edit by shelling out to the p4 command-line client.
"""

from p4edit.core.config import Config
from p4edit.core.errors import (
    CommandFailedError,
    NoClientBindingError,
    NoWorkspaceFolderError,
    P4EditError,
    ParseIncompleteError,
    ProcessLaunchError,
    ResolutionError,
)
from p4edit.core.types import (
    ClientRow,
    CommandResult,
    ServerInfo,
    ServiceConfig,
    WorkspaceState,
)
from p4edit.functions import (
    edit_file,
    get_server_info,
    list_clients,
    load_service_config,
    resolve_client,
    resolve_clients,
)
from p4edit.perforce.parsers import parse_clients, parse_info
from p4edit.service import PerforceService

__version__ = "0.1.0"

__all__ = [
    # Core types
    "ClientRow",
    "CommandResult",
    "Config",
    "ServerInfo",
    "ServiceConfig",
    "WorkspaceState",
    # Errors
    "CommandFailedError",
    "NoClientBindingError",
    "NoWorkspaceFolderError",
    "P4EditError",
    "ParseIncompleteError",
    "ProcessLaunchError",
    "ResolutionError",
    # Service
    "PerforceService",
    # Parsers
    "parse_clients",
    "parse_info",
    # One-shot functions (simple API)
    "edit_file",
    "get_server_info",
    "list_clients",
    "load_service_config",
    "resolve_client",
    "resolve_clients",
]


def main() -> None:
    """CLI entry point."""
    import sys

    from p4edit.cli import main as cli_main

    sys.exit(cli_main())
