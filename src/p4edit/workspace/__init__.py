"""Workspace resolution layer for p4edit."""

from p4edit.workspace.editor import EditOrchestrator
from p4edit.workspace.registry import WorkspaceRegistry
from p4edit.workspace.resolver import WorkspaceResolver

__all__ = [
    "EditOrchestrator",
    "WorkspaceRegistry",
    "WorkspaceResolver",
]
