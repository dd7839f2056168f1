"""Waypoint session: the context object behind every project command.

Responsibilities:
1. Own the saved catalog, the recent stack and session state for one session
2. Listing: aggregate catalog + locators, annotate, sort (one request at a time wins)
3. Save/update: the name prompt and "already exists" decision, serialized per session
4. Open: recent-stack bookkeeping, invalid-path repair or removal
5. Refresh/edit/status helpers for the front-end
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from waypoint.aggregator import SourceFailure, aggregate
from waypoint.annotate import annotate
from waypoint.catalog.store import (
    CatalogEntry,
    CatalogLoadError,
    ProjectStorage,
    resolve_projects_file,
)
from waypoint.config import WaypointConfig
from waypoint.entry import ALL_SOURCES, Entry, Origin
from waypoint.locators.base import Locator
from waypoint.locators.git import GitLocator
from waypoint.locators.svn import SvnLocator
from waypoint.locators.vscode import VSCodeLocator
from waypoint.paths import compact_home_path, expand_home_path, same_path
from waypoint.prompts import (
    CANCEL,
    DELETE_PROJECT,
    EDIT_MANUALLY,
    UPDATE,
    UPDATE_PROJECT,
    Prompter,
)
from waypoint.recent import RecentStack
from waypoint.sorter import sort_entries
from waypoint.state import STATE_FILE, SessionState

logger = logging.getLogger(__name__)

RECENT_KEY = "recent"


class SaveOutcome(Enum):
    CREATED = "created"
    UPDATED = "updated"
    CANCELLED = "cancelled"
    NAME_EMPTY = "name_empty"


@dataclass
class Listing:
    """Result of one listing request, ready for a picker."""

    entries: list[Entry]
    request_id: int
    open_in_new_window: bool = True
    failures: list[SourceFailure] = field(default_factory=list)


@dataclass(frozen=True)
class OpenRequest:
    """What the front-end should open."""

    label: str
    path: str
    new_window: bool


@dataclass(frozen=True)
class EditRequest:
    """The catalog file the front-end should open in an editor."""

    path: Path


_LOCATOR_TYPES = {
    Origin.VSCODE: VSCodeLocator,
    Origin.GIT: GitLocator,
    Origin.SVN: SvnLocator,
}


def build_locators(config: WaypointConfig) -> dict[Origin, Locator]:
    locators: dict[Origin, Locator] = {}
    for origin, locator_type in _LOCATOR_TYPES.items():
        settings = config.locator(origin.value)
        locators[origin] = locator_type(settings.max_depth, settings.ignored_folders)
    return locators


class Waypoint:
    """Per-session project manager; front-ends call into this."""

    def __init__(
        self,
        config: WaypointConfig,
        prompter: Prompter,
        locators: dict[Origin, Locator] | None = None,
        state: SessionState | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.state = state or SessionState(config.state_dir / STATE_FILE)
        self.recent = RecentStack.parse(self.state.get(RECENT_KEY, ""), config.recent_limit)
        self.storage = ProjectStorage(resolve_projects_file(config))
        self.load_error = self.storage.load()
        self._locators = build_locators(config) if locators is None else locators
        self._save_lock = asyncio.Lock()
        self._request_id = 0

    # ── Listing ──────────────────────────────────────────────

    def _base_folders(self) -> dict[Origin, list[str]]:
        return {
            origin: self.config.locator(origin.value).base_folders
            for origin in _LOCATOR_TYPES
        }

    def _check_loaded(self) -> None:
        if self.load_error:
            raise CatalogLoadError(self.storage.path, self.load_error)

    async def list_entries(
        self,
        force_new_window: bool = False,
        sources: Collection[Origin] = ALL_SOURCES,
        current_root: str | None = None,
    ) -> Listing:
        """Aggregate, annotate and sort every candidate project.

        Starting a new request supersedes earlier ones (see ``is_current``).
        """
        self._check_loaded()
        self._request_id += 1
        request_id = self._request_id

        aggregation = await aggregate(
            self.storage.to_entries(),
            sources,
            self._locators,
            self._base_folders(),
            merge=self.config.merge_projects,
        )
        entries = annotate(aggregation.entries, current_root)
        entries = sort_entries(entries, self.config.sort_list, self.recent)
        logger.debug("Listing %d: %d entries, %d failed sources",
                     request_id, len(entries), len(aggregation.failures))
        return Listing(
            entries=entries,
            request_id=request_id,
            open_in_new_window=self.config.open_in_new_window or force_new_window,
            failures=aggregation.failures,
        )

    def is_current(self, listing: Listing) -> bool:
        return listing.request_id == self._request_id

    async def pick_and_open(
        self,
        force_new_window: bool = False,
        sources: Collection[Origin] = ALL_SOURCES,
        current_root: str | None = None,
    ) -> OpenRequest | EditRequest | None:
        """List projects, let the user pick one, and open it."""
        listing = await self.list_entries(force_new_window, sources, current_root)
        for failure in listing.failures:
            self.prompter.notify(
                f"Could not scan {failure.origin.value} projects: {failure.message}", warning=True
            )
        if not listing.entries:
            self.prompter.notify("No projects saved yet!")
            return None

        selected = await self.prompter.pick(listing.entries)
        if not self.is_current(listing):
            logger.info("Listing %d superseded, ignoring selection", listing.request_id)
            return None
        if selected is None:
            return None
        return await self.open_entry(selected, listing.open_in_new_window)

    # ── Open ─────────────────────────────────────────────────

    async def open_entry(
        self, entry: Entry, new_window: bool | None = None
    ) -> OpenRequest | EditRequest | None:
        """Record ``entry`` as recently used and return what to open.

        A missing path of a saved project offers to edit the catalog or delete
        that project. Discovered entries are only reported; the catalog is never
        changed on their behalf.
        """
        path = expand_home_path(entry.location)
        if not os.path.exists(path):
            saved = self._saved_project_for(entry)
            if saved is None:
                self.prompter.notify(
                    f"The project has an invalid path: {path}. Refresh the projects to rescan.",
                    warning=True,
                )
                return None

            option = await self.prompter.choose(
                "The project has an invalid path. What would you like to do?",
                [UPDATE_PROJECT, DELETE_PROJECT],
            )
            if option == UPDATE_PROJECT:
                edit_path = await self.edit_projects()
                return EditRequest(edit_path) if edit_path else None
            if option == DELETE_PROJECT:
                self.remove_project(saved.name)
            return None

        self._remember(entry.label)
        if new_window is None:
            new_window = self.config.open_in_new_window
        return OpenRequest(label=entry.label, path=path, new_window=new_window)

    def _saved_project_for(self, entry: Entry) -> CatalogEntry | None:
        """The catalog project ``entry`` was listed from, if any."""
        if entry.origin is not Origin.CATALOG:
            return None
        saved = self.storage.exists(entry.label)
        if saved is None:
            return None
        if not same_path(expand_home_path(saved.root_path), expand_home_path(entry.location)):
            return None
        return saved

    def _remember(self, label: str) -> None:
        self.recent.push(label)
        self.state.update(RECENT_KEY, self.recent.to_string())

    # ── Save / update ────────────────────────────────────────

    async def save_project(self, root_path: str, name: str | None = None) -> SaveOutcome:
        """Save ``root_path`` under a (prompted) name, or update an existing one.

        The catalog is reloaded inside the lock so concurrent saves each apply
        to the latest file contents.
        """
        if name is None:
            suggestion = os.path.basename(os.path.normpath(root_path))
            name = await self.prompter.ask_name(suggestion)
            if name is None:
                return SaveOutcome.CANCELLED
        if not name.strip():
            self.prompter.notify("You must define a name for the project.", warning=True)
            return SaveOutcome.NAME_EMPTY

        compact_root = compact_home_path(os.path.normpath(root_path))
        async with self._save_lock:
            self.load_error = self.storage.load()
            self._check_loaded()

            if self.storage.exists(name) is None:
                self.storage.push(name, compact_root)
                outcome = SaveOutcome.CREATED
            else:
                option = await self.prompter.choose("Project already exists!", [UPDATE, CANCEL])
                if option != UPDATE:
                    return SaveOutcome.CANCELLED
                self.storage.update_root_path(name, compact_root)
                outcome = SaveOutcome.UPDATED

            self.storage.save()
            self._remember(name)

        logger.info("Project %r %s (%s)", name, outcome.value, compact_root)
        self.prompter.notify("Project saved!")
        return outcome

    # ── Catalog maintenance ──────────────────────────────────

    def remove_project(self, name: str) -> bool:
        removed = self.storage.pop(name)
        if removed is None:
            logger.debug("Project %r not in catalog, nothing to remove", name)
            return False
        self.storage.save()
        logger.info("Removed project %r", name)
        return True

    def refresh_projects(self) -> None:
        for locator in self._locators.values():
            locator.refresh_projects()
        self.prompter.notify("The projects have been refreshed!")

    async def edit_projects(self) -> Path | None:
        """Return the catalog file to edit, creating a template when the user agrees."""
        if self.storage.path.exists():
            return self.storage.path

        option = await self.prompter.choose(
            "No projects saved yet! You should open a folder and use Save Project instead. "
            "Do you really want to edit manually?",
            [EDIT_MANUALLY],
        )
        if option != EDIT_MANUALLY:
            return None
        self.storage.push("Project Name", "Root Path")
        self.storage.save()
        self.load_error = ""
        return self.storage.path

    def current_project_name(self, current_root: str | None) -> str | None:
        """Saved name of the folder that is open, for a status display."""
        if not self.config.show_project_name_in_status_bar or not current_root:
            return None
        found = self.storage.exists_with_root_path(compact_home_path(current_root))
        return found.name if found else None
