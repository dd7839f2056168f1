"""Entry point: python -m waypoint [list|open|save|edit]

- No args / "open": Pick a project from all sources and print the folder to open
- "list [SOURCE...]": Print the sorted project list (sources: projects, vscode, git, svn)
- "save [NAME]":    Save the current directory as a project
- "edit":           Print the path of projects.json (creating it on request)
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from waypoint.catalog.store import CatalogLoadError
from waypoint.config import load_config
from waypoint.core import EditRequest
from waypoint.entry import display_label, parse_origins


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build():
    config = load_config()
    _setup_logging(config.log_level)

    from waypoint.core import Waypoint
    from waypoint.prompts import ConsolePrompter

    return Waypoint(config, ConsolePrompter())


async def _list(waypoint, args: list[str]) -> None:
    try:
        sources = parse_origins(args or None)
    except ValueError as e:
        print(f"Unknown source: {e}", file=sys.stderr)
        sys.exit(1)
    listing = await waypoint.list_entries(sources=sources, current_root=os.getcwd())
    for failure in listing.failures:
        print(f"warning: {failure.origin.value}: {failure.message}", file=sys.stderr)
    for entry in listing.entries:
        suffix = f"  [{entry.detail}]" if entry.detail else ""
        print(f"{display_label(entry)}\t{entry.location}{suffix}")


async def _open(waypoint) -> None:
    request = await waypoint.pick_and_open(current_root=os.getcwd())
    if isinstance(request, EditRequest):
        print(f"Edit {request.path}")
    elif request:
        print(request.path)


async def _run(cmd: str, args: list[str]) -> None:
    waypoint = _build()
    if cmd == "list":
        await _list(waypoint, args)
    elif cmd == "open":
        await _open(waypoint)
    elif cmd == "save":
        await waypoint.save_project(os.getcwd(), args[0] if args else None)
    elif cmd == "edit":
        path = await waypoint.edit_projects()
        if path:
            print(path)


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "open"

    if cmd not in ("list", "open", "save", "edit"):
        print("Usage: python -m waypoint [open|list [SOURCE...]|save [NAME]|edit]")
        print("  open     Pick a project and print its folder (default)")
        print("  list     Print every known project")
        print("  save     Save the current directory as a project")
        print("  edit     Print the projects.json path")
        sys.exit(1)

    try:
        asyncio.run(_run(cmd, sys.argv[2:]))
    except CatalogLoadError as e:
        print(f"{e}\nRun 'python -m waypoint edit' to repair it.", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
