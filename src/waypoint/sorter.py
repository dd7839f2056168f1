"""Ordering of the annotated entry list."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from waypoint.entry import Entry
from waypoint.recent import RecentStack

logger = logging.getLogger(__name__)


class SortCriterion(Enum):
    NAME = "Name"
    PATH = "Path"
    RECENT = "Recent"
    SAVED = "Saved"


# Older settings spell the saved order out in full.
_ALIASES = {"saved-order": SortCriterion.SAVED}


def parse_criterion(value: str | SortCriterion | None) -> SortCriterion:
    """Map a ``sort_list`` setting to a criterion; unknown values sort by name."""
    if isinstance(value, SortCriterion):
        return value
    if value and value.lower() in _ALIASES:
        return _ALIASES[value.lower()]
    for criterion in SortCriterion:
        if value and criterion.value.lower() == value.lower():
            return criterion
    if value:
        logger.warning("Unknown sort criterion %r, sorting by Name", value)
    return SortCriterion.NAME


def _by_name(entry: Entry) -> str:
    return entry.label.lower()


def _by_path(entry: Entry) -> str:
    return entry.location.lower()


def sort_entries(
    entries: Sequence[Entry],
    criterion: str | SortCriterion | None,
    recent: RecentStack | None = None,
) -> list[Entry]:
    """Return ``entries`` ordered by ``criterion``.

    All sorts are stable, so ties keep the aggregation (origin) order.
    """
    criterion = parse_criterion(criterion)

    if criterion is SortCriterion.SAVED:
        return list(entries)
    if criterion is SortCriterion.PATH:
        return sorted(entries, key=_by_path)
    if criterion is SortCriterion.RECENT:
        stack = recent or RecentStack()
        by_name = sorted(entries, key=_by_name)
        used = [e for e in by_name if e.label in stack]
        unused = [e for e in by_name if e.label not in stack]
        used.sort(key=lambda e: stack.order_of(e.label))
        return used + unused
    return sorted(entries, key=_by_name)
