#!/usr/bin/env python3
"""One-shot p4edit API example.

This example demonstrates how to:
- Resolve the Perforce client for a directory
- Open a read-only file for edit
"""

import sys
from pathlib import Path

from p4edit import ResolutionError, edit_file, resolve_client


def main() -> int:
    """Resolve the client for the current directory and edit a file."""
    root = Path.cwd()

    try:
        client = resolve_client(root)
    except ResolutionError as e:
        print(f"Not a Perforce workspace: {e}", file=sys.stderr)
        return 1
    print(f"{root} belongs to client {client}")

    if len(sys.argv) > 1:
        target = Path(sys.argv[1]).absolute()
        if edit_file(target, root):
            print(f"{target} is ready to be written")
        else:
            print(f"Could not open {target} for edit", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
