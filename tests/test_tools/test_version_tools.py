"""Tests for the version tools."""

from pathlib import Path

import pytest
from git import Repo

from gitpilot.config import Settings
from gitpilot.session import GitSession
from gitpilot.tools import (
    PermissionLevel,
    PermissionManager,
    ToolExecutor,
    ToolRegistry,
    register_builtin_tools,
)
from gitpilot.tools.builtin.version import get_version_tools


@pytest.fixture
def selected(executor: ToolExecutor, git_repo: Repo) -> ToolExecutor:
    executor.call("set_repository", {"path": git_repo.working_tree_dir})
    return executor


class TestVersionTools:
    """Tests for get_current_version, bump_patch_version and set_version."""

    def test_levels(self, session: GitSession):
        tools = {t.name: t for t in get_version_tools(session)}

        assert tools["get_current_version"].permission_level == PermissionLevel.SAFE
        assert tools["bump_patch_version"].permission_level == PermissionLevel.CAUTIOUS
        assert tools["set_version"].permission_level == PermissionLevel.CAUTIOUS

    def test_fresh_repository(self, selected: ToolExecutor, git_repo: Repo):
        result = selected.call("get_current_version")

        assert result.content == "0.0.0"
        assert (Path(git_repo.working_tree_dir) / "version.json").read_text() == "0.0.0"

    def test_bump(self, selected: ToolExecutor):
        assert selected.call("bump_patch_version").content == "0.0.1"
        assert selected.call("bump_patch_version").content == "0.0.2"

    def test_set_then_get(self, selected: ToolExecutor):
        assert selected.call("set_version", {"semver": "9.9.9"}).content == "Version set to 9.9.9"
        assert selected.call("get_current_version").content == "9.9.9"

    def test_set_verbatim_then_bump_fails(self, selected: ToolExecutor):
        """Test any string is stored and only the next bump reports the bad format."""
        assert selected.call("set_version", {"semver": "bad"}).content == "Version set to bad"
        assert selected.call("get_current_version").content == "bad"

        result = selected.call("bump_patch_version")

        assert result.error_code == "VERSION_FORMAT_ERROR"
        assert "Suggestion: Use set_version" in result.content

    def test_bump_invalid_file(self, selected: ToolExecutor, git_repo: Repo):
        (Path(git_repo.working_tree_dir) / "version.json").write_text("1.x")

        result = selected.call("bump_patch_version")

        assert result.error_code == "VERSION_FORMAT_ERROR"

    def test_strict_setting(self, git_repo: Repo):
        """Test strict mode rejects a malformed version before writing."""
        session = GitSession(Settings(versioning={"strict": True}))
        registry = ToolRegistry()
        register_builtin_tools(registry, session)
        executor = ToolExecutor(registry=registry, permissions=PermissionManager(auto_approve=True))
        executor.call("set_repository", {"path": git_repo.working_tree_dir})

        result = executor.call("set_version", {"semver": "bad"})

        assert result.error_code == "VERSION_FORMAT_ERROR"
        assert executor.call("get_current_version").content == "0.0.0"
        session.close()

    def test_version_follows_repository(self, selected: ToolExecutor, tmp_path: Path):
        """Test the version file moves with the selected repository."""
        selected.call("set_version", {"semver": "2.0.0"})
        other = Repo.init(tmp_path / "other", initial_branch="main")
        selected.call("set_repository", {"path": other.working_tree_dir})

        assert selected.call("get_current_version").content == "0.0.0"
        other.close()
