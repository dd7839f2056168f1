"""Tests for the marker-directory locators."""

from __future__ import annotations

import os

import pytest
from pathlib import Path

from waypoint.entry import Origin
from waypoint.locators.base import DiscoveredProject, Locator
from waypoint.locators.git import GitLocator
from waypoint.locators.svn import SvnLocator
from waypoint.locators.vscode import VSCodeLocator


def _make(root: Path, *parts: str) -> Path:
    path = root.joinpath(*parts)
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    base = _make(tmp_path, "code")
    _make(base, "api", ".git")
    _make(base, "api", "sub", ".git")  # nested repo below a root: not reported
    _make(base, "group", "web", ".git")
    (_make(base, "worktree") / ".git").write_text("gitdir: /elsewhere\n")
    _make(base, "node_modules", "pkg", ".git")
    _make(base, "legacy", ".svn")
    _make(base, "editor", ".vscode")
    _make(base, "deep", "a", "b", "c", "d", "e", ".git")
    return base


class TestProtocol:
    def test_locators_satisfy_protocol(self):
        for locator in (GitLocator(), SvnLocator(), VSCodeLocator()):
            assert isinstance(locator, Locator)

    def test_kinds(self):
        assert GitLocator().kind is Origin.GIT
        assert SvnLocator().kind is Origin.SVN
        assert VSCodeLocator().kind is Origin.VSCODE


class TestGitLocator:
    @pytest.mark.asyncio
    async def test_finds_repositories(self, tree: Path):
        locator = GitLocator(max_depth=4, ignored_folders=["node_modules"])
        found = await locator.locate_projects([str(tree)])
        assert found == [
            DiscoveredProject("api", str(tree / "api")),
            DiscoveredProject("web", str(tree / "group" / "web")),
            DiscoveredProject("worktree", str(tree / "worktree")),
        ]

    @pytest.mark.asyncio
    async def test_max_depth(self, tree: Path):
        locator = GitLocator(max_depth=6, ignored_folders=["node_modules"])
        found = await locator.locate_projects([str(tree)])
        assert DiscoveredProject("e", str(tree / "deep" / "a" / "b" / "c" / "d" / "e")) in found

    @pytest.mark.asyncio
    async def test_empty_or_missing_base_folders(self, tmp_path: Path):
        locator = GitLocator()
        assert await locator.locate_projects(None) == []
        assert await locator.locate_projects([]) == []
        assert await locator.locate_projects([str(tmp_path / "missing")]) == []

    @pytest.mark.asyncio
    async def test_duplicate_base_folders_report_once(self, tree: Path):
        locator = GitLocator(ignored_folders=["node_modules"])
        found = await locator.locate_projects([str(tree), str(tree / "api")])
        assert [p.name for p in found].count("api") == 1

    @pytest.mark.asyncio
    async def test_cache_until_refresh(self, tree: Path):
        locator = GitLocator(ignored_folders=["node_modules"])
        first = await locator.locate_projects([str(tree)])
        _make(tree, "fresh", ".git")
        assert await locator.locate_projects([str(tree)]) == first

        locator.refresh_projects()
        names = [p.name for p in await locator.locate_projects([str(tree)])]
        assert "fresh" in names

    @pytest.mark.asyncio
    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions")
    async def test_unreadable_base_folder_raises(self, tmp_path: Path):
        locked = _make(tmp_path, "locked")
        locked.chmod(0)
        try:
            with pytest.raises(PermissionError):
                await GitLocator().locate_projects([str(locked)])
        finally:
            locked.chmod(0o755)


class TestOtherLocators:
    @pytest.mark.asyncio
    async def test_svn(self, tree: Path):
        found = await SvnLocator().locate_projects([str(tree)])
        assert found == [DiscoveredProject("legacy", str(tree / "legacy"))]

    @pytest.mark.asyncio
    async def test_vscode(self, tree: Path):
        found = await VSCodeLocator().locate_projects([str(tree)])
        assert found == [DiscoveredProject("editor", str(tree / "editor"))]
