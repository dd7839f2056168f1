"""Prepare aggregated entries for display: expand, exclude, flag."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable

from waypoint.entry import INVALID_PATH_DETAIL, Entry
from waypoint.paths import expand_home_path, same_path

logger = logging.getLogger(__name__)


def expand_home_paths(entries: Iterable[Entry], home: str | None = None) -> list[Entry]:
    return [e.with_location(expand_home_path(e.location, home)) for e in entries]


def remove_root_path(entries: Iterable[Entry], current_root: str | None) -> list[Entry]:
    """Drop entries pointing at the folder that is already open."""
    if not current_root:
        return list(entries)
    return [e for e in entries if not same_path(e.location, current_root)]


def indicate_invalid_paths(
    entries: Iterable[Entry], exists: Callable[[str], bool] = os.path.exists
) -> list[Entry]:
    result = []
    for entry in entries:
        if not entry.detail and not exists(entry.location):
            logger.debug("Project %r points to missing path %s", entry.label, entry.location)
            entry = entry.with_detail(INVALID_PATH_DETAIL)
        result.append(entry)
    return result


def annotate(
    entries: Iterable[Entry],
    current_root: str | None = None,
    *,
    home: str | None = None,
    exists: Callable[[str], bool] = os.path.exists,
) -> list[Entry]:
    items = expand_home_paths(entries, home)
    items = remove_root_path(items, current_root)
    return indicate_invalid_paths(items, exists)
