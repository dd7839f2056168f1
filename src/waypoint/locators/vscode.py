"""VS Code workspace locator."""

from __future__ import annotations

from waypoint.entry import Origin
from waypoint.locators.base import MarkerLocator


class VSCodeLocator(MarkerLocator):
    """Finds folders carrying a ``.vscode`` settings directory."""

    marker = ".vscode"
    marker_is_dir = True
    origin = Origin.VSCODE
