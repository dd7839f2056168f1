"""Git working-tree locator."""

from __future__ import annotations

from waypoint.entry import Origin
from waypoint.locators.base import MarkerLocator


class GitLocator(MarkerLocator):
    """Finds Git repositories; ``.git`` may be a directory or a worktree file."""

    marker = ".git"
    marker_is_dir = False
    origin = Origin.GIT
