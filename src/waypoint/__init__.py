"""Waypoint: catalog projects and reopen them from saved, IDE and VCS roots."""
