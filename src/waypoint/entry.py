"""Pipeline entry types and their presentation mapping."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Origin(Enum):
    """Where an entry came from. Declaration order is the aggregation fold order."""

    CATALOG = "projects"
    VSCODE = "vscode"
    GIT = "git"
    SVN = "svn"


ALL_SOURCES: frozenset[Origin] = frozenset(Origin)
DISCOVERY_ORIGINS: tuple[Origin, ...] = (Origin.VSCODE, Origin.GIT, Origin.SVN)

INVALID_PATH_DETAIL = "$(circle-slash) Path does not exist"

_ORIGIN_ICONS = {
    Origin.CATALOG: "",
    Origin.VSCODE: "$(file-code) ",
    Origin.GIT: "$(git-branch) ",
    Origin.SVN: "$(zap) ",
}


@dataclass(frozen=True)
class Entry:
    """One project candidate flowing through aggregate → annotate → sort."""

    label: str
    location: str
    origin: Origin = Origin.CATALOG
    detail: str | None = None

    def with_location(self, location: str) -> Entry:
        return replace(self, location=location)

    def with_detail(self, detail: str | None) -> Entry:
        return replace(self, detail=detail)


def display_label(entry: Entry) -> str:
    """Label as shown in a picker, prefixed with the origin icon."""
    return _ORIGIN_ICONS[entry.origin] + entry.label


def parse_origins(names: list[str] | None) -> frozenset[Origin]:
    """Map configured source names (``"git"``, ``"projects"``...) to origins.

    ``None`` means every source; unknown names raise ``ValueError``.
    """
    if names is None:
        return ALL_SOURCES
    return frozenset(Origin(name.lower()) for name in names)
