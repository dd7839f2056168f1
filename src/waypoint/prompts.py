"""Host-UI boundary: the questions the core asks, and a console implementation."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from waypoint.entry import Entry, display_label

logger = logging.getLogger(__name__)

UPDATE = "Update"
CANCEL = "Cancel"
UPDATE_PROJECT = "Update Project"
DELETE_PROJECT = "Delete Project"
EDIT_MANUALLY = "Yes, edit manually"


@runtime_checkable
class Prompter(Protocol):
    """Protocol that every front-end (terminal, editor plugin...) implements."""

    async def ask_name(self, suggestion: str) -> str | None:
        """Ask for a project name. None means the user dismissed the prompt."""
        ...

    async def choose(self, message: str, options: Sequence[str]) -> str | None:
        """Show ``message`` with ``options``; returns the chosen option or None."""
        ...

    async def pick(self, entries: Sequence[Entry]) -> Entry | None:
        """Let the user select one entry from the ordered list."""
        ...

    def notify(self, message: str, *, warning: bool = False) -> None: ...


class ConsolePrompter:
    """Prompter reading from stdin and writing to stdout."""

    async def _input(self, prompt: str) -> str | None:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._read_line, prompt)

    def _read_line(self, prompt: str) -> str | None:
        sys.stdout.write(prompt)
        sys.stdout.flush()
        raw = sys.stdin.buffer.readline()
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace").rstrip("\n")

    async def ask_name(self, suggestion: str) -> str | None:
        answer = await self._input(f"Project Name [{suggestion}]: ")
        if answer is None:
            return None
        return answer.strip() or suggestion

    async def choose(self, message: str, options: Sequence[str]) -> str | None:
        print(message)
        for index, option in enumerate(options, 1):
            print(f"  {index}) {option}")
        answer = await self._input("> ")
        return _pick_index(answer, options)

    async def pick(self, entries: Sequence[Entry]) -> Entry | None:
        for index, entry in enumerate(entries, 1):
            line = f"{index:3d}  {display_label(entry)}  {entry.location}"
            if entry.detail:
                line += f"  [{entry.detail}]"
            print(line)
        answer = await self._input("Pick one to open: ")
        return _pick_index(answer, entries)

    def notify(self, message: str, *, warning: bool = False) -> None:
        print(message, file=sys.stderr if warning else sys.stdout)


def _pick_index(answer: str | None, items: Sequence):
    if not answer or not answer.strip().isdigit():
        return None
    index = int(answer.strip()) - 1
    if 0 <= index < len(items):
        return items[index]
    return None
