"""Perforce command-line integration for p4edit."""

from p4edit.perforce.commands import PerforceCommands
from p4edit.perforce.executor import PerforceExecutor
from p4edit.perforce.parsers import parse_clients, parse_info

__all__ = [
    "PerforceCommands",
    "PerforceExecutor",
    "parse_clients",
    "parse_info",
]
