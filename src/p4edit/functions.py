"""Python API for p4edit.

This module provides synchronous one-shot functions for using p4edit as a
library or from scripts. Each call builds a fresh PerforceService, so nothing
is cached between calls; long-running hosts should keep a PerforceService.
"""

import asyncio
from collections.abc import Iterable
from pathlib import Path

from p4edit.core.config import Config
from p4edit.core.errors import ParseIncompleteError
from p4edit.core.types import ClientRow, ServerInfo, ServiceConfig
from p4edit.service import PerforceService


def load_service_config(config_path: str | Path | None = None) -> ServiceConfig:
    """Load service configuration from a settings file.

    Args:
        config_path: Settings file. Uses the application data directory if None.

    Returns:
        ServiceConfig instance.
    """
    if config_path is None:
        return Config.default().to_service_config()
    return Config.from_file(Path(config_path)).to_service_config()


def resolve_client(root: str | Path, config: ServiceConfig | None = None) -> str:
    """Resolve the Perforce client owning a workspace root.

    Args:
        root: Workspace root directory.
        config: Optional service configuration.

    Returns:
        Client identifier.

    Raises:
        ResolutionError: If no client could be determined.
    """
    service = PerforceService(config)
    return asyncio.run(service.resolver.resolve(root))


def resolve_clients(
    roots: Iterable[str | Path], config: ServiceConfig | None = None
) -> dict[Path, str | None]:
    """Resolve several workspace roots concurrently.

    Args:
        roots: Workspace root directories.
        config: Optional service configuration.

    Returns:
        Mapping of each root to its client, or None if it could not be resolved.
    """
    service = PerforceService(config)
    return asyncio.run(service.notify_workspace_roots_changed(roots))


def edit_file(
    path: str | Path,
    workspace_root: str | Path | None = None,
    config: ServiceConfig | None = None,
) -> bool:
    """Make a file writable, opening it for edit if it is read-only.

    Args:
        path: File to edit.
        workspace_root: Workspace root. Defaults to the file's directory.
        config: Optional service configuration.

    Returns:
        True if the file can be written.
    """
    file_path = Path(path)
    service = PerforceService(config)
    service.registry.add_root(workspace_root or file_path.absolute().parent)
    return asyncio.run(service.ensure_editable(file_path, workspace_root))


def get_server_info(
    directory: str | Path, config: ServiceConfig | None = None
) -> ServerInfo:
    """Run `p4 info` in a directory.

    Args:
        directory: Working directory.
        config: Optional service configuration.

    Returns:
        Parsed server information.
    """
    service = PerforceService(config)
    service.registry.add_root(directory)
    return asyncio.run(service.commands.info(directory))


def list_clients(
    directory: str | Path,
    user: str | None = None,
    config: ServiceConfig | None = None,
) -> list[ClientRow]:
    """List a user's clients.

    Args:
        directory: Working directory.
        user: Perforce user. Defaults to the user reported by `p4 info`.
        config: Optional service configuration.

    Returns:
        Client rows.
    """
    service = PerforceService(config)
    service.registry.add_root(directory)

    async def _list() -> list[ClientRow]:
        name = user
        if name is None:
            info = await service.commands.info(directory)
            if not info.user_name:
                raise ParseIncompleteError("p4 info did not report a user name")
            name = info.user_name
        return await service.commands.clients(directory, name)

    return asyncio.run(_list())
