"""Tests for the saved-project catalog."""

from __future__ import annotations

import json

import pytest
from pathlib import Path

from waypoint.catalog.store import (
    PROJECTS_FILE,
    CatalogEntry,
    CatalogLoadError,
    ProjectStorage,
    resolve_projects_file,
)
from waypoint.config import WaypointConfig
from waypoint.entry import Origin


@pytest.fixture
def storage(tmp_path: Path) -> ProjectStorage:
    s = ProjectStorage(tmp_path / "cfg" / PROJECTS_FILE)
    assert s.load() == ""
    return s


class TestLoadSave:
    def test_missing_file_is_empty(self, storage: ProjectStorage):
        assert len(storage) == 0

    def test_save_then_load_preserves_order(self, storage: ProjectStorage):
        storage.push("zeta", "/z")
        storage.push("alpha", "$home/a", note="main repo")
        storage.save()

        other = ProjectStorage(storage.path)
        assert other.load() == ""
        assert [e.label for e in other.to_entries()] == ["zeta", "alpha"]
        assert other.exists("alpha") == CatalogEntry("alpha", "$home/a", "main repo")

    def test_file_format(self, storage: ProjectStorage):
        storage.push("api", "/src/api")
        storage.save()
        data = json.loads(storage.path.read_text(encoding="utf-8"))
        assert data == [{"label": "api", "location": "/src/api", "note": ""}]
        assert "\t" in storage.path.read_text(encoding="utf-8")

    def test_malformed_json_reports_message(self, storage: ProjectStorage):
        storage.path.parent.mkdir(parents=True, exist_ok=True)
        storage.path.write_text("[{not json", encoding="utf-8")
        error = storage.load()
        assert error != ""
        assert len(storage) == 0

    def test_wrong_shape_reports_message(self, storage: ProjectStorage):
        storage.path.parent.mkdir(parents=True, exist_ok=True)
        storage.path.write_text('{"label": "x"}', encoding="utf-8")
        assert "expected a list" in storage.load()

    def test_missing_field_reports_message(self, storage: ProjectStorage):
        storage.path.parent.mkdir(parents=True, exist_ok=True)
        storage.path.write_text('[{"label": "x"}]', encoding="utf-8")
        assert "location" in storage.load()

    def test_duplicate_names_in_file_keep_first(self, storage: ProjectStorage):
        storage.path.parent.mkdir(parents=True, exist_ok=True)
        storage.path.write_text(json.dumps([
            {"label": "a", "location": "/1"},
            {"label": "a", "location": "/2"},
        ]), encoding="utf-8")
        assert storage.load() == ""
        assert len(storage) == 1
        assert storage.exists("a") == CatalogEntry("a", "/1")

    def test_load_error_message(self, tmp_path: Path):
        error = CatalogLoadError(tmp_path / PROJECTS_FILE, "boom")
        assert str(error) == "Error loading projects.json file. Message: boom"
        assert error.message == "boom"


class TestCrud:
    def test_push_rejects_duplicate_name(self, storage: ProjectStorage):
        storage.push("a", "/x")
        with pytest.raises(ValueError):
            storage.push("a", "/y")
        assert len(storage) == 1

    def test_duplicate_roots_allowed(self, storage: ProjectStorage):
        storage.push("a", "/x")
        storage.push("b", "/x")
        assert len(storage) == 2

    def test_update_root_path(self, storage: ProjectStorage):
        storage.push("a", "/x", note="keep")
        storage.update_root_path("a", "/y")
        assert storage.exists("a") == CatalogEntry("a", "/y", "keep")

    def test_update_unknown_raises(self, storage: ProjectStorage):
        with pytest.raises(KeyError):
            storage.update_root_path("nope", "/y")

    def test_pop(self, storage: ProjectStorage):
        storage.push("a", "/x")
        storage.push("b", "/y")
        assert storage.pop("a") == CatalogEntry("a", "/x")
        assert storage.pop("a") is None
        assert [e.label for e in storage.to_entries()] == ["b"]

    def test_exists_with_root_path_case_insensitive(self, storage: ProjectStorage):
        storage.push("a", "$home/Code/API")
        assert storage.exists_with_root_path("$home/code/api").name == "a"
        assert storage.exists_with_root_path("/elsewhere") is None

    def test_uniqueness_after_mixed_operations(self, storage: ProjectStorage):
        for name, root in [("a", "/1"), ("b", "/2"), ("c", "/3")]:
            storage.push(name, root)
        storage.update_root_path("a", "/4")
        storage.update_root_path("b", "/1")
        with pytest.raises(ValueError):
            storage.push("c", "/5")
        names = [e.label for e in storage.to_entries()]
        assert len(names) == len(set(names))

    def test_to_entries(self, storage: ProjectStorage):
        storage.push("a", "/x")
        entries = storage.to_entries()
        assert entries[0].label == "a"
        assert entries[0].location == "/x"
        assert entries[0].origin is Origin.CATALOG
        assert entries[0].detail is None


class TestResolveProjectsFile:
    def test_explicit_location(self, tmp_path: Path):
        config = WaypointConfig(projects_location=str(tmp_path))
        assert resolve_projects_file(config) == tmp_path / PROJECTS_FILE

    def test_platform_default(self):
        path = resolve_projects_file(WaypointConfig())
        assert path.name == PROJECTS_FILE
        assert "waypoint" in str(path.parent)
