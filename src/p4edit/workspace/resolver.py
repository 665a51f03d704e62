"""Resolve the Perforce client that owns a workspace root.

Resolution tries a fixed list of strategies and stops at the first one that
names a client:

1. P4CONFIG files found by walking up from the root.
2. `p4 info`, when the reported client root contains the workspace.
3. `p4 clients -u <user>`, matching on host and client root.

Results are cached per root for the lifetime of the process. Concurrent
requests for the same root share a single in-flight attempt.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from p4edit.core.config import client_from_settings, read_config_file
from p4edit.core.errors import NoWorkspaceFolderError, P4EditError, ResolutionError
from p4edit.core.paths import is_same_or_relative_to, iter_ancestors, normalize_path
from p4edit.core.types import ServerInfo, ServiceConfig, WorkspaceState
from p4edit.perforce.commands import PerforceCommands
from p4edit.workspace.registry import WorkspaceRegistry

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """State shared between strategies during one resolution attempt."""

    root: Path
    server_info: ServerInfo | None = None


class ResolutionStrategy(ABC):
    """One way of finding the client for a workspace root."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get strategy name."""
        pass

    @abstractmethod
    async def resolve(self, context: ResolutionContext) -> str | None:
        """Try to find the client for context.root.

        Args:
            context: Resolution context.

        Returns:
            Client identifier, or None if this strategy found nothing.
        """
        pass


class ConfigFileStrategy(ResolutionStrategy):
    """Reads the client from P4CONFIG files above the workspace root."""

    def __init__(
        self,
        filenames: list[str] | tuple[str, ...],
        client_keys: list[str] | tuple[str, ...],
    ) -> None:
        """Initialize strategy.

        Args:
            filenames: Config file names to search for, in priority order.
            client_keys: Keys naming the client, in priority order.
        """
        self._filenames = list(filenames)
        self._client_keys = list(client_keys)

    @property
    def name(self) -> str:
        return "config-file"

    async def resolve(self, context: ResolutionContext) -> str | None:
        return await asyncio.to_thread(self._search, context.root)

    def _search(self, root: Path) -> str | None:
        """Walk up from root once per file name; the deepest match wins."""
        for filename in self._filenames:
            for directory in iter_ancestors(root):
                config_path = directory / filename
                if not config_path.is_file():
                    continue

                try:
                    settings = read_config_file(config_path)
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(f"Could not read {config_path}: {e}")
                    return None

                client = client_from_settings(settings, self._client_keys)
                if client:
                    logger.debug(f"Found client {client} in {config_path}")
                    return client
        return None


class InfoStrategy(ResolutionStrategy):
    """Uses the client reported by `p4 info` when its root covers the workspace."""

    def __init__(self, commands: PerforceCommands) -> None:
        self._commands = commands

    @property
    def name(self) -> str:
        return "info"

    async def resolve(self, context: ResolutionContext) -> str | None:
        info = await self._commands.info(context.root)
        context.server_info = info

        if not info.client_name or not info.client_root:
            return None
        if is_same_or_relative_to(context.root, info.client_root):
            return info.client_name
        return None


class ClientsStrategy(ResolutionStrategy):
    """Searches the user's clients for one on this host rooted above the workspace."""

    def __init__(self, commands: PerforceCommands) -> None:
        self._commands = commands

    @property
    def name(self) -> str:
        return "clients"

    async def resolve(self, context: ResolutionContext) -> str | None:
        info = context.server_info
        if info is None or not info.user_name:
            return None

        rows = await self._commands.clients(context.root, info.user_name)
        for row in rows:
            if row.host != info.client_host:
                continue
            if is_same_or_relative_to(context.root, row.root):
                return row.client
        return None


def default_strategies(
    commands: PerforceCommands, config: ServiceConfig
) -> list[ResolutionStrategy]:
    """Build the standard strategy chain.

    Args:
        commands: p4 command wrappers.
        config: Service configuration.

    Returns:
        Strategies in the order they should be tried.
    """
    return [
        ConfigFileStrategy(config.config_filenames, config.client_keys),
        InfoStrategy(commands),
        ClientsStrategy(commands),
    ]


class WorkspaceResolver:
    """Maps workspace roots to Perforce clients."""

    def __init__(
        self,
        registry: WorkspaceRegistry,
        commands: PerforceCommands | None = None,
        config: ServiceConfig | None = None,
        strategies: list[ResolutionStrategy] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            registry: Registry that owns the root to client map.
            commands: p4 command wrappers. Required unless strategies is given.
            config: Service configuration.
            strategies: Custom strategy chain. Defaults to default_strategies().
        """
        self._registry = registry
        if strategies is None:
            if commands is None:
                raise ValueError("Either commands or strategies must be provided")
            strategies = default_strategies(commands, config or ServiceConfig())
        self._strategies = strategies
        self._pending: dict[Path, asyncio.Task[str]] = {}

    @property
    def registry(self) -> WorkspaceRegistry:
        """Get workspace registry."""
        return self._registry

    @property
    def strategies(self) -> list[ResolutionStrategy]:
        """Get strategy chain."""
        return list(self._strategies)

    async def resolve(self, root: str | Path) -> str:
        """Get the client for a workspace root, resolving it if needed.

        The root is registered with the registry if it is not known yet. A root
        whose resolution failed fails again immediately until the registry
        clears the failure.

        Args:
            root: Workspace root directory.

        Returns:
            Client identifier.

        Raises:
            ResolutionError: If no strategy could name a client.
        """
        path = self._registry.add_root(root)

        client = self._registry.get_client(path)
        if client is not None:
            return client

        task = self._pending.get(path)
        if task is None:
            if self._registry.state(path) is WorkspaceState.FAILED:
                raise ResolutionError(f"resolution already failed for workspace {path}")
            task = asyncio.create_task(self._resolve_uncached(path))
            self._pending[path] = task
            task.add_done_callback(lambda _: self._pending.pop(path, None))
        return await asyncio.shield(task)

    async def resolve_path(self, path: str | Path) -> str:
        """Get the client for the known workspace root containing path.

        Args:
            path: File or directory path.

        Returns:
            Client identifier.

        Raises:
            NoWorkspaceFolderError: If path is outside every known root.
            ResolutionError: If no strategy could name a client.
        """
        root = self._registry.find_root(path)
        if root is None:
            raise NoWorkspaceFolderError(
                f"{normalize_path(path)} is not in a known workspace folder"
            )
        return await self.resolve(root)

    async def _resolve_uncached(self, root: Path) -> str:
        self._registry.set_state(root, WorkspaceState.RESOLVING)
        try:
            client = await self._run_strategies(root)
        except Exception:
            self._registry.set_state(root, WorkspaceState.FAILED)
            raise
        self._registry.bind(root, client)
        return client

    async def _run_strategies(self, root: Path) -> str:
        context = ResolutionContext(root=root)

        for strategy in self._strategies:
            try:
                client = await strategy.resolve(context)
            except P4EditError as e:
                logger.warning(f"Strategy {strategy.name} failed for {root}: {e}")
                continue

            if client:
                logger.info(f"Resolved {root} to {client} via {strategy.name}")
                return client
            logger.debug(f"Strategy {strategy.name} found no client for {root}")

        raise ResolutionError(f"no client found for workspace {root}")
