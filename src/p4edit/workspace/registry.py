"""Known workspace roots and their client bindings."""

import logging
from pathlib import Path

from p4edit.core.paths import is_same_or_relative_to, normalize_path
from p4edit.core.types import WorkspaceState

logger = logging.getLogger(__name__)


class WorkspaceRegistry:
    """Tracks workspace roots reported by the host and the client bound to each.

    Bindings are only ever added. Removing a root stops it from matching path
    lookups but keeps its binding for the rest of the process lifetime.
    """

    def __init__(self) -> None:
        self._roots: set[Path] = set()
        self._bindings: dict[Path, str] = {}
        self._states: dict[Path, WorkspaceState] = {}

    @property
    def roots(self) -> list[Path]:
        """Get known workspace roots, sorted."""
        return sorted(self._roots)

    @property
    def bindings(self) -> dict[Path, str]:
        """Get a copy of the root to client map."""
        return dict(self._bindings)

    def add_root(self, root: str | Path) -> Path:
        """Register a workspace root.

        Args:
            root: Workspace root directory.

        Returns:
            The normalized root path.
        """
        path = normalize_path(root)
        if path not in self._roots:
            self._roots.add(path)
            self._states.setdefault(path, WorkspaceState.UNRESOLVED)
            logger.debug(f"Registered workspace root: {path}")
        return path

    def remove_root(self, root: str | Path) -> None:
        """Forget a workspace root for path lookups.

        Args:
            root: Workspace root directory.
        """
        self._roots.discard(normalize_path(root))

    def find_root(self, path: str | Path) -> Path | None:
        """Find the deepest known root containing path.

        Args:
            path: File or directory path.

        Returns:
            Workspace root, or None if path is outside every known root.
        """
        matches = [
            root for root in self._roots if is_same_or_relative_to(path, root)
        ]
        if not matches:
            return None
        return max(matches, key=lambda root: len(root.parts))

    def get_client(self, root: str | Path) -> str | None:
        """Get the client bound to a root."""
        return self._bindings.get(normalize_path(root))

    def client_for(self, path: str | Path) -> str | None:
        """Get the client bound to the root containing path."""
        root = self.find_root(path)
        if root is None:
            return None
        return self._bindings.get(root)

    def bind(self, root: str | Path, client: str) -> None:
        """Bind a client to a root and mark it resolved.

        Args:
            root: Workspace root directory.
            client: Client identifier.
        """
        path = normalize_path(root)
        self._bindings[path] = client
        self._states[path] = WorkspaceState.BOUND
        logger.info(f"Bound workspace {path} to client {client}")

    def state(self, root: str | Path) -> WorkspaceState:
        """Get the resolution state of a root."""
        return self._states.get(normalize_path(root), WorkspaceState.UNRESOLVED)

    def set_state(self, root: str | Path, state: WorkspaceState) -> None:
        """Set the resolution state of a root."""
        self._states[normalize_path(root)] = state

    def clear_failure(self, root: str | Path) -> None:
        """Allow a root whose resolution failed to be resolved again."""
        path = normalize_path(root)
        if self._states.get(path) is WorkspaceState.FAILED:
            self._states[path] = WorkspaceState.UNRESOLVED
            logger.debug(f"Cleared failed resolution for {path}")
