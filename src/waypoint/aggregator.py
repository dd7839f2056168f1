"""Collect candidate entries from the catalog and every enabled locator.

Locator queries run concurrently, but their results are folded in the fixed
``Origin`` order, so the output does not depend on which scan finishes
first. A failing locator contributes nothing and is reported in
``Aggregation.failures``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field

from waypoint.entry import DISCOVERY_ORIGINS, Entry, Origin
from waypoint.locators.base import DiscoveredProject, Locator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFailure:
    """A locator that could not produce its projects."""

    origin: Origin
    message: str


@dataclass
class Aggregation:
    entries: list[Entry] = field(default_factory=list)
    failures: list[SourceFailure] = field(default_factory=list)


def merge_source(running: list[Entry], discovered: list[Entry], merge: bool) -> list[Entry]:
    """Fold one locator's output into the running list.

    With ``merge`` the discovered entries come first and the running list is
    appended after them; without it the discovered entries replace it.
    """
    if merge:
        return discovered + running
    return list(discovered)


def to_entries(origin: Origin, projects: Sequence[DiscoveredProject]) -> list[Entry]:
    return [Entry(label=p.name, location=p.full_path, origin=origin) for p in projects]


async def aggregate(
    catalog_entries: Sequence[Entry],
    sources: Collection[Origin],
    locators: Mapping[Origin, Locator],
    base_folders: Mapping[Origin, Sequence[str]],
    merge: bool = True,
) -> Aggregation:
    """Build the unified, unsorted candidate list for one listing request."""
    result = Aggregation()
    running: list[Entry] = list(catalog_entries) if Origin.CATALOG in sources else []

    enabled = [o for o in DISCOVERY_ORIGINS if o in sources and o in locators]
    for origin in DISCOVERY_ORIGINS:
        if origin in sources and origin not in locators:
            logger.warning("No locator registered for %s, skipping", origin.value)

    outcomes = await asyncio.gather(
        *(locators[o].locate_projects(base_folders.get(o)) for o in enabled),
        return_exceptions=True,
    )

    for origin, outcome in zip(enabled, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning("%s locator failed: %s", origin.value, outcome)
            result.failures.append(SourceFailure(origin, str(outcome) or type(outcome).__name__))
            # A failed source never replaces what was gathered so far.
            continue
        running = merge_source(running, to_entries(origin, outcome), merge)

    result.entries = running
    return result
