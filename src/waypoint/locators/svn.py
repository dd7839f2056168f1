"""Subversion working-copy locator."""

from __future__ import annotations

from waypoint.entry import Origin
from waypoint.locators.base import MarkerLocator


class SvnLocator(MarkerLocator):
    marker = ".svn"
    marker_is_dir = True
    origin = Origin.SVN
