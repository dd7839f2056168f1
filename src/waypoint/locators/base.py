"""Locator protocol and the shared marker-directory walker."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from waypoint.entry import Origin
from waypoint.paths import expand_user_folder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredProject:
    """A project root found by a locator."""

    name: str
    full_path: str


@runtime_checkable
class Locator(Protocol):
    """Protocol that all discovery sources must implement."""

    @property
    def kind(self) -> Origin: ...

    async def locate_projects(
        self, base_folders: Sequence[str] | None
    ) -> list[DiscoveredProject]:
        """Scan ``base_folders`` and return the project roots found.

        An empty or missing folder list yields an empty result.
        """
        ...

    def refresh_projects(self) -> None:
        """Drop any cached scan so the next call rescans the filesystem."""
        ...


class MarkerLocator:
    """Finds directories that contain a marker entry (``.git``, ``.svn``...).

    The walk stops descending at a project root and at ``max_depth``. Scans run
    in a worker thread and are cached per base-folder list until
    ``refresh_projects()``.
    """

    marker: str = ""
    marker_is_dir: bool = False
    origin: Origin = Origin.GIT

    def __init__(self, max_depth: int = 4, ignored_folders: Iterable[str] = ()) -> None:
        self.max_depth = max_depth
        self.ignored_folders = frozenset(ignored_folders)
        self._cache: dict[tuple[str, ...], list[DiscoveredProject]] = {}

    @property
    def kind(self) -> Origin:
        return self.origin

    async def locate_projects(
        self, base_folders: Sequence[str] | None
    ) -> list[DiscoveredProject]:
        if not base_folders:
            return []
        key = tuple(base_folders)
        if key not in self._cache:
            self._cache[key] = await asyncio.to_thread(self._scan, key)
            logger.info(
                "%s locator found %d projects in %d folders",
                self.kind.value, len(self._cache[key]), len(key),
            )
        return list(self._cache[key])

    def refresh_projects(self) -> None:
        self._cache.clear()

    # ── Filesystem walk ───────────────────────────────────────

    def _scan(self, base_folders: tuple[str, ...]) -> list[DiscoveredProject]:
        found: list[DiscoveredProject] = []
        seen: set[str] = set()
        for folder in base_folders:
            root = os.path.normpath(expand_user_folder(folder))
            if not os.path.isdir(root):
                logger.debug("Base folder does not exist: %s", root)
                continue
            # Unreadable base folders raise; the aggregator reports them.
            os.listdir(root)
            for project in self._walk(root, 0):
                if project.full_path not in seen:
                    seen.add(project.full_path)
                    found.append(project)
        return found

    def _walk(self, directory: str, depth: int) -> Iterable[DiscoveredProject]:
        if self._is_project(directory):
            yield DiscoveredProject(self._project_name(directory), directory)
            return
        if depth >= self.max_depth:
            return
        try:
            with os.scandir(directory) as it:
                children = sorted(
                    entry.path
                    for entry in it
                    if entry.is_dir(follow_symlinks=False)
                    and entry.name not in self.ignored_folders
                )
        except OSError as e:
            logger.debug("Skipping unreadable folder %s: %s", directory, e)
            return
        for child in children:
            yield from self._walk(child, depth + 1)

    def _is_project(self, directory: str) -> bool:
        candidate = os.path.join(directory, self.marker)
        if self.marker_is_dir:
            return os.path.isdir(candidate)
        return os.path.exists(candidate)

    def _project_name(self, directory: str) -> str:
        return os.path.basename(directory) or directory
