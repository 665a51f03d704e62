#!/usr/bin/env python3
"""Editor save-hook example.

A long-running host keeps one PerforceService, reports its workspace roots
once, and asks for every file to be made editable right before saving it.
"""

import asyncio
import logging
import sys
from pathlib import Path

from p4edit import PerforceService, load_service_config


async def save(service: PerforceService, path: Path, content: str) -> bool:
    """Write content to path, running p4 edit first if the file is read-only."""
    if not await service.ensure_editable(path):
        print(f"Save vetoed: {path} could not be opened for edit", file=sys.stderr)
        return False
    path.write_text(content, encoding="utf-8")
    return True


async def run(roots: list[Path]) -> None:
    service = PerforceService(load_service_config())

    clients = await service.notify_workspace_roots_changed(roots)
    for root, client in clients.items():
        print(f"{root}: {client or 'not a Perforce workspace'}")

    for root in roots:
        await save(service, root / "p4edit-example.txt", "saved by p4edit\n")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run([Path(arg).absolute() for arg in sys.argv[1:]] or [Path.cwd()]))
