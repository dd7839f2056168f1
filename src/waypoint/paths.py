"""Home-relative path helpers.

Roots under the user's home directory are persisted with the home prefix
replaced by ``$home``, so the same catalog works on machines where the
user name (and therefore the home path) differs.
"""

from __future__ import annotations

import os
from pathlib import Path

HOME_VARIABLE = "$home"


def _home(home: str | None) -> str:
    home_dir = home if home is not None else str(Path.home())
    return home_dir.rstrip("/\\")


def compact_home_path(path: str, home: str | None = None) -> str:
    """Replace a leading home directory with ``$home``.

    Only whole path components match, and a root-level home (``/``) is never
    compacted.
    """
    home_dir = _home(home)
    if not home_dir or not path.startswith(home_dir):
        return path
    rest = path[len(home_dir):]
    if rest and rest[0] not in "/\\":
        return path
    return HOME_VARIABLE + rest


def expand_home_path(path: str, home: str | None = None) -> str:
    """Replace a leading ``$home`` with the real home directory."""
    if path.startswith(HOME_VARIABLE):
        rest = path[len(HOME_VARIABLE):]
        if not rest or rest[0] in "/\\":
            return _home(home) + rest
    return path


def expand_user_folder(path: str) -> str:
    """Expand both ``$home`` and ``~`` in a configured folder."""
    return os.path.expanduser(expand_home_path(path))


def same_path(left: str, right: str) -> bool:
    """Case-insensitive path comparison, as used for current-root exclusion."""
    return left.lower() == right.lower()
