"""Command-line interface for p4edit.

This module provides commands for:
- Resolving the Perforce client of one or more workspace roots
- Opening a file for edit when it is read-only
- Inspecting `p4 info` and `p4 clients` output
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from p4edit.core.errors import P4EditError
from p4edit.core.types import ServiceConfig
from p4edit.functions import (
    edit_file,
    get_server_info,
    list_clients,
    load_service_config,
    resolve_clients,
)


def _service_config(args: argparse.Namespace) -> ServiceConfig:
    """Load service configuration for parsed arguments."""
    return load_service_config(args.config)


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve command handler.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    results = resolve_clients(args.roots, _service_config(args))

    exit_code = 0
    for root, client in results.items():
        if client is None:
            print(f"{root} -> (no client found)", file=sys.stderr)
            exit_code = 1
        else:
            print(f"{root} -> {client}")
    return exit_code


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit command handler.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    if edit_file(args.file, args.root, _service_config(args)):
        print(f"{args.file} is writable")
        return 0

    print(f"Could not open {args.file} for edit", file=sys.stderr)
    return 1


def cmd_info(args: argparse.Namespace) -> int:
    """Info command handler.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    try:
        info = get_server_info(args.directory, _service_config(args))
    except P4EditError as e:
        print(f"p4 info failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(info.model_dump(exclude_none=True), indent=2))
    return 0


def cmd_clients(args: argparse.Namespace) -> int:
    """Clients command handler.

    Args:
        args: Parsed arguments.

    Returns:
        Exit code.
    """
    try:
        rows = list_clients(args.directory, args.user, _service_config(args))
    except P4EditError as e:
        print(f"p4 clients failed: {e}", file=sys.stderr)
        return 1

    if not rows:
        print("No clients found.")
        return 0

    for row in rows:
        print(f"{row.client}\t{row.root}\t{row.host}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="p4edit",
        description="Resolve Perforce workspaces and open files for edit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (default: ~/.p4edit/config.json)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and p4 output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Find the client for workspace roots"
    )
    resolve_parser.add_argument(
        "roots",
        nargs="+",
        type=Path,
        help="Workspace root directories",
    )
    resolve_parser.set_defaults(func=cmd_resolve)

    # edit command
    edit_parser = subparsers.add_parser(
        "edit", help="Open a file for edit if it is read-only"
    )
    edit_parser.add_argument("file", type=Path, help="File to edit")
    edit_parser.add_argument(
        "--root",
        type=Path,
        help="Workspace root (default: the file's directory)",
    )
    edit_parser.set_defaults(func=cmd_edit)

    # info command
    info_parser = subparsers.add_parser("info", help="Show parsed p4 info")
    info_parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Working directory (default: current directory)",
    )
    info_parser.set_defaults(func=cmd_info)

    # clients command
    clients_parser = subparsers.add_parser("clients", help="List a user's clients")
    clients_parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Working directory (default: current directory)",
    )
    clients_parser.add_argument(
        "--user",
        "-u",
        help="Perforce user (default: user reported by p4 info)",
    )
    clients_parser.set_defaults(func=cmd_clients)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments to parse. Uses sys.argv if None.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        # No command specified, show help
        parser.print_help()
        print()
        print("Quick start:")
        print("  p4edit resolve .                 # Client for the current directory")
        print("  p4edit edit src/main.c           # Open a read-only file for edit")
        print("  p4edit info                      # Show parsed p4 info")
        print("  p4edit clients -u alice          # List alice's clients")
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
