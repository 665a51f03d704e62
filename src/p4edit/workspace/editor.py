"""Open read-only files for edit before they are saved."""

import asyncio
import logging
import os
from pathlib import Path

from p4edit.core.errors import NoWorkspaceFolderError, P4EditError
from p4edit.core.paths import normalize_path
from p4edit.perforce.commands import PerforceCommands
from p4edit.workspace.resolver import WorkspaceResolver

logger = logging.getLogger(__name__)


def is_writable(path: Path) -> bool:
    """Check whether the current process may write to path.

    A file that does not exist yet counts as writable.
    """
    if not path.exists():
        return True
    return os.access(path, os.W_OK)


class EditOrchestrator:
    """Makes files writable by running `p4 edit` when they are read-only."""

    def __init__(self, resolver: WorkspaceResolver, commands: PerforceCommands) -> None:
        """Initialize orchestrator.

        Args:
            resolver: Resolver for the file's workspace client.
            commands: p4 command wrappers.
        """
        self._resolver = resolver
        self._commands = commands

    async def ensure_editable(
        self, file_path: str | Path, workspace_root: str | Path | None = None
    ) -> bool:
        """Make sure a file can be written.

        Writable files return immediately. Otherwise the owning workspace is
        resolved and `p4 edit` is run once for the file, scoped to the
        resolved client and run from that workspace root.

        Args:
            file_path: File about to be saved.
            workspace_root: Workspace root containing the file. Looked up in
                the registry when None.

        Returns:
            True if the file is ready to be written, False otherwise.
        """
        path = normalize_path(file_path)

        if await asyncio.to_thread(is_writable, path):
            return True

        try:
            if workspace_root is not None:
                root = normalize_path(workspace_root)
            else:
                root = self._resolver.registry.find_root(path)
            if root is None:
                raise NoWorkspaceFolderError(f"{path} is not in a known workspace folder")
            client = await self._resolver.resolve(root)
        except P4EditError as e:
            logger.error(f"Cannot open {path} for edit: {e}")
            return False

        result = await self._commands.edit(path, client, root)
        if result.failed:
            logger.error(f"p4 edit failed for {path}: {result.stderr.strip()}")
            return False

        logger.info(f"Opened {path} for edit")
        return True
