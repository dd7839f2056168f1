"""Saved project catalog.

Layout:
    <config dir>/projects.json          # Ordered array of saved projects
    [
        {"label": "api", "location": "$home/src/api", "note": ""},
        ...
    ]

The directory is ``projects_location`` when configured, else the platform
user-config directory. Locations under the home directory are stored with
the ``$home`` prefix (see ``waypoint.paths``).
"""
