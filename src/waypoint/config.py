"""Configuration loading from environment variables and waypoint.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_STATE_DIR = Path.home() / ".waypoint"
_CONFIG_FILENAME = "waypoint.toml"

DEFAULT_IGNORED_FOLDERS = ["node_modules", "out", "typings", "test", ".git", ".svn"]


@dataclass
class LocatorConfig:
    """Per-source discovery configuration."""

    base_folders: list[str] = field(default_factory=list)
    max_depth: int = 4
    ignored_folders: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_FOLDERS))


@dataclass
class WaypointConfig:
    """Top-level Waypoint configuration."""

    sort_list: str = "Name"
    projects_location: str = ""
    open_in_new_window: bool = True
    merge_projects: bool = True
    show_project_name_in_status_bar: bool = True
    recent_limit: int = 10
    vscode: LocatorConfig = field(default_factory=LocatorConfig)
    git: LocatorConfig = field(default_factory=LocatorConfig)
    svn: LocatorConfig = field(default_factory=LocatorConfig)
    state_dir: Path = _DEFAULT_STATE_DIR
    log_level: str = "INFO"

    def locator(self, name: str) -> LocatorConfig:
        return getattr(self, name)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_folders(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None:
        return list(default)
    return [part for part in value.split(os.pathsep) if part]


def _locator_config(data: dict, env_prefix: str) -> LocatorConfig:
    return LocatorConfig(
        base_folders=_env_folders(f"{env_prefix}_BASE_FOLDERS", data.get("base_folders", [])),
        max_depth=int(data.get("max_depth", 4)),
        ignored_folders=list(data.get("ignored_folders", DEFAULT_IGNORED_FOLDERS)),
    )


def load_config(config_path: Path | None = None) -> WaypointConfig:
    """Load configuration from environment variables and optional waypoint.toml.

    Priority: environment variables > waypoint.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.waypoint/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_STATE_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    config = WaypointConfig(
        sort_list=os.getenv("WAYPOINT_SORT_LIST", file_data.get("sort_list", "Name")),
        projects_location=os.getenv(
            "WAYPOINT_PROJECTS_LOCATION", file_data.get("projects_location", "")
        ),
        open_in_new_window=_env_bool(
            "WAYPOINT_OPEN_IN_NEW_WINDOW", file_data.get("open_in_new_window", True)
        ),
        merge_projects=_env_bool("WAYPOINT_MERGE_PROJECTS", file_data.get("merge_projects", True)),
        show_project_name_in_status_bar=bool(
            file_data.get("show_project_name_in_status_bar", True)
        ),
        recent_limit=int(os.getenv("WAYPOINT_RECENT_LIMIT", file_data.get("recent_limit", 10))),
        vscode=_locator_config(file_data.get("vscode", {}), "WAYPOINT_VSCODE"),
        git=_locator_config(file_data.get("git", {}), "WAYPOINT_GIT"),
        svn=_locator_config(file_data.get("svn", {}), "WAYPOINT_SVN"),
        state_dir=Path(
            os.getenv("WAYPOINT_STATE_DIR", file_data.get("state_dir", str(_DEFAULT_STATE_DIR)))
        ).expanduser(),
        log_level=os.getenv("WAYPOINT_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
