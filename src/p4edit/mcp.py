"""MCP server for p4edit using FastMCP v2.

This module exposes the host-facing PerforceService API as tools, so an
editor or agent can report its workspace roots and ask for files to be
opened for edit before saving them.

Usage:
    # Run with FastMCP CLI
    fastmcp run p4edit.mcp:mcp

    # Or run directly
    python -m p4edit.mcp
"""

from typing import Any

from fastmcp import FastMCP

from p4edit.core.errors import P4EditError
from p4edit.functions import load_service_config
from p4edit.service import PerforceService

mcp = FastMCP(
    "p4edit",
    instructions="Resolve Perforce workspaces and open files for edit before saving",
)

# One service per server process so bindings are shared between tool calls
_service: PerforceService | None = None


def get_service() -> PerforceService:
    """Get the shared service, creating it on first use."""
    global _service
    if _service is None:
        _service = PerforceService(load_service_config())
    return _service


def set_service(service: PerforceService | None) -> None:
    """Replace the shared service. Passing None resets it."""
    global _service
    _service = service


async def notify_workspace_roots_changed(
    added: list[str],
    removed: list[str] | None = None,
) -> dict[str, Any]:
    """Report workspace roots that were added or removed.

    Args:
        added: Workspace roots that appeared.
        removed: Workspace roots that went away.

    Returns:
        Client resolved for each added root (null when none was found).
    """
    results = await get_service().notify_workspace_roots_changed(added, removed or [])
    return {"clients": {str(root): client for root, client in results.items()}}


async def notify_document_opened(path: str) -> dict[str, Any]:
    """Report an opened file so its workspace gets resolved.

    Args:
        path: Opened file.

    Returns:
        Client for the file's workspace, or null.
    """
    client = await get_service().notify_document_opened(path)
    return {"path": path, "client": client}


async def ensure_editable(path: str, workspace_root: str | None = None) -> dict[str, Any]:
    """Make a file writable before saving, running p4 edit if needed.

    Args:
        path: File about to be saved.
        workspace_root: Workspace root containing the file, if known.

    Returns:
        Whether the file can be written.
    """
    editable = await get_service().ensure_editable(path, workspace_root)
    return {"path": path, "editable": editable}


async def resolve_client(root: str) -> dict[str, Any]:
    """Resolve the Perforce client for a workspace root.

    Args:
        root: Workspace root directory.

    Returns:
        The client, or an error message.
    """
    try:
        client = await get_service().resolver.resolve(root)
    except P4EditError as e:
        return {"root": root, "client": None, "error": str(e)}
    return {"root": root, "client": client}


for _tool in (
    notify_workspace_roots_changed,
    notify_document_opened,
    ensure_editable,
    resolve_client,
):
    mcp.tool(_tool)


if __name__ == "__main__":
    mcp.run()
