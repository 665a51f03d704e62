"""Host-facing service that ties resolution and editing together.

The host (an editor integration, the CLI or the MCP server) owns the
lifecycle events and calls into PerforceService:

- notify_workspace_roots_changed() when its set of project roots changes
- notify_document_opened() when a file is opened, optionally
- ensure_editable() right before a file is saved
"""

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from p4edit.core.constant import OUTPUT_LOGGER_NAME
from p4edit.core.errors import P4EditError
from p4edit.core.paths import normalize_path
from p4edit.core.types import ServiceConfig
from p4edit.perforce.commands import PerforceCommands
from p4edit.perforce.executor import PerforceExecutor
from p4edit.workspace.editor import EditOrchestrator
from p4edit.workspace.registry import WorkspaceRegistry
from p4edit.workspace.resolver import WorkspaceResolver

logger = logging.getLogger(__name__)


def attach_log_file(log_file: Path) -> None:
    """Append the diagnostic output log to a file.

    Calling this twice with the same file adds only one handler.

    Args:
        log_file: Log file path.
    """
    output = logging.getLogger(OUTPUT_LOGGER_NAME)
    target = os.path.abspath(log_file)
    for handler in output.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    output.addHandler(handler)
    output.setLevel(logging.INFO)


class PerforceService:
    """Resolves Perforce clients for workspace roots and opens files for edit."""

    def __init__(
        self,
        config: ServiceConfig | None = None,
        executor: PerforceExecutor | None = None,
    ) -> None:
        """Initialize service.

        Args:
            config: Service configuration.
            executor: Custom executor. Its registry becomes the service's
                registry.
        """
        self._config = config or ServiceConfig()
        if executor is None:
            executor = PerforceExecutor(WorkspaceRegistry(), self._config)
        self._registry = executor.registry
        self._commands = PerforceCommands(executor)
        self._resolver = WorkspaceResolver(self._registry, self._commands, self._config)
        self._editor = EditOrchestrator(self._resolver, self._commands)

        if self._config.log_file is not None:
            attach_log_file(self._config.log_file)

    @property
    def config(self) -> ServiceConfig:
        """Get service configuration."""
        return self._config

    @property
    def registry(self) -> WorkspaceRegistry:
        """Get workspace registry."""
        return self._registry

    @property
    def commands(self) -> PerforceCommands:
        """Get p4 command wrappers."""
        return self._commands

    @property
    def resolver(self) -> WorkspaceResolver:
        """Get workspace resolver."""
        return self._resolver

    async def notify_workspace_roots_changed(
        self,
        added: Iterable[str | Path],
        removed: Iterable[str | Path] = (),
    ) -> dict[Path, str | None]:
        """Update the known roots and resolve the newly added ones.

        Roots are resolved concurrently. A root that cannot be resolved maps
        to None and does not affect the others. Adding a root again retries
        a resolution that failed earlier.

        Args:
            added: Roots that appeared.
            removed: Roots that went away. Their bindings are kept.

        Returns:
            Mapping of each added root to its client, or None on failure.
        """
        for root in removed:
            self._registry.remove_root(root)

        roots = [self._registry.add_root(root) for root in added]
        for root in roots:
            self._registry.clear_failure(root)
        results = await asyncio.gather(
            *(self._resolver.resolve(root) for root in roots),
            return_exceptions=True,
        )

        resolved: dict[Path, str | None] = {}
        for root, result in zip(roots, results):
            if isinstance(result, P4EditError):
                logger.warning(f"Could not resolve workspace {root}: {result}")
                resolved[root] = None
            elif isinstance(result, BaseException):
                raise result
            else:
                resolved[root] = result
        return resolved

    async def notify_document_opened(self, path: str | Path) -> str | None:
        """Make sure the workspace of an opened file is resolved.

        Files outside every known root get their parent directory registered
        as a root of its own.

        Args:
            path: Opened file.

        Returns:
            Client for the file, or None if it could not be resolved.
        """
        file_path = normalize_path(path)
        root = self._registry.find_root(file_path)
        if root is None:
            root = file_path.parent
            logger.debug(f"Treating {root} as a loose workspace root")

        try:
            return await self._resolver.resolve(root)
        except P4EditError as e:
            logger.warning(f"Could not resolve workspace for {file_path}: {e}")
            return None

    async def ensure_editable(
        self, path: str | Path, workspace_root: str | Path | None = None
    ) -> bool:
        """Make sure a file can be written, running `p4 edit` if needed.

        Args:
            path: File about to be saved.
            workspace_root: Workspace root containing the file, if the host
                knows it.

        Returns:
            True if the file can be written.
        """
        return await self._editor.ensure_editable(path, workspace_root)

    def client_for(self, path: str | Path) -> str | None:
        """Get the bound client for the root containing path, if any."""
        return self._registry.client_for(path)
