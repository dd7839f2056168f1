"""Saved-project catalog backed by projects.json.

The JSON file is the source of truth. It is read once into an ordered
in-memory list; every mutation goes through this class and is written back
with ``save()``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from platformdirs import user_config_dir

from waypoint.entry import Entry, Origin
from waypoint.paths import same_path

if TYPE_CHECKING:
    from waypoint.config import WaypointConfig

logger = logging.getLogger(__name__)

APP_NAME = "waypoint"
PROJECTS_FILE = "projects.json"


class CatalogLoadError(Exception):
    """projects.json exists but cannot be read as a project list."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Error loading {path.name} file. Message: {message}")
        self.path = path
        self.message = message


@dataclass
class CatalogEntry:
    """A manually saved project."""

    name: str
    root_path: str
    note: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"label": self.name, "location": self.root_path, "note": self.note}

    @classmethod
    def from_dict(cls, data: dict) -> CatalogEntry:
        return cls(
            name=str(data["label"]),
            root_path=str(data["location"]),
            note=str(data.get("note", "")),
        )


def resolve_projects_file(config: WaypointConfig) -> Path:
    """Return projects.json path: explicit ``projects_location`` or the platform config dir."""
    if config.projects_location:
        return Path(config.projects_location).expanduser() / PROJECTS_FILE
    return Path(user_config_dir(APP_NAME, appauthor=False)) / PROJECTS_FILE


class ProjectStorage:
    """Read/write access to the saved-project list."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._projects: list[CatalogEntry] = []

    def __len__(self) -> int:
        return len(self._projects)

    # ── Persistence ───────────────────────────────────────────

    def load(self) -> str:
        """Load projects.json, returning "" on success or the error message.

        A missing file is an empty catalog. On error the catalog is left empty.
        """
        self._projects = []
        if not self.path.exists():
            return ""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"expected a list of projects, got {type(data).__name__}")
            projects = [CatalogEntry.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load %s: %s", self.path, e)
            return str(e)

        seen: set[str] = set()
        for project in projects:
            if project.name in seen:
                logger.warning(
                    "Duplicate project name %r in %s, keeping first", project.name, self.path
                )
                continue
            seen.add(project.name)
            self._projects.append(project)
        logger.debug("Loaded %d projects from %s", len(self._projects), self.path)
        return ""

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [project.to_dict() for project in self._projects]
        self.path.write_text(
            json.dumps(payload, indent="\t", ensure_ascii=False) + "\n", encoding="utf-8"
        )

    # ── CRUD ──────────────────────────────────────────────────

    def push(self, name: str, root_path: str, note: str = "") -> CatalogEntry:
        """Append a new project. Names are unique."""
        if self.exists(name):
            raise ValueError(f"Project '{name}' already exists")
        project = CatalogEntry(name=name, root_path=root_path, note=note)
        self._projects.append(project)
        return project

    def pop(self, name: str) -> CatalogEntry | None:
        """Remove the project called ``name``; returns it, or None when absent."""
        for index, project in enumerate(self._projects):
            if project.name == name:
                return self._projects.pop(index)
        return None

    def update_root_path(self, name: str, root_path: str) -> None:
        project = self.exists(name)
        if project is None:
            raise KeyError(name)
        project.root_path = root_path

    def exists(self, name: str) -> CatalogEntry | None:
        for project in self._projects:
            if project.name == name:
                return project
        return None

    def exists_with_root_path(self, root_path: str) -> CatalogEntry | None:
        for project in self._projects:
            if same_path(project.root_path, root_path):
                return project
        return None

    def to_entries(self) -> list[Entry]:
        return [Entry(p.name, p.root_path, Origin.CATALOG) for p in self._projects]
