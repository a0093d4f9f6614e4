"""Pytest configuration and fixtures for GitPilot tests."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator

import pytest
from git import Actor, Repo

from gitpilot.config import Settings, reset_settings
from gitpilot.session import GitSession
from gitpilot.tools import PermissionManager, ToolExecutor, ToolRegistry, register_builtin_tools

TEST_ACTOR = Actor("Test User", "test@example.com")

CommitFile = Callable[..., str]


@pytest.fixture(autouse=True)
def clean_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Keep the developer's credentials, overrides and config file out of every test."""
    for name in list(os.environ):
        if name.startswith("GITPILOT_") or name in ("GIT_USER", "GIT_PAT", "GIT_USERNAME", "GIT_TOKEN"):
            monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "home" / ".gitpilot"
    monkeypatch.setattr("gitpilot.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("gitpilot.config.CONFIG_FILE", config_dir / "config.yaml")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def commit_file() -> CommitFile:
    """Return a helper that writes a file and commits it as TEST_ACTOR.

    The helper returns the full hex SHA of the new commit.
    """

    def _commit(repo: Repo, name: str, content, message: str) -> str:
        path = Path(repo.working_tree_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        repo.index.add([name])
        commit = repo.index.commit(message, author=TEST_ACTOR, committer=TEST_ACTOR)
        return commit.hexsha

    return _commit


@pytest.fixture
def empty_repo(tmp_path: Path) -> Generator[Repo, None, None]:
    """An initialized repository on branch main with no commits."""
    repo = Repo.init(tmp_path / "repo", initial_branch="main")
    yield repo
    repo.close()


@pytest.fixture
def git_repo(empty_repo: Repo, commit_file: CommitFile) -> Repo:
    """A repository with three commits, newest first:

    - "Fix readme" (body mentions the App launch)
    - "Add app module"
    - "Initial commit"
    """
    commit_file(empty_repo, "README.md", "hello\n", "Initial commit")
    commit_file(empty_repo, "src/app.py", "a\nb\nc\n", "Add app module")
    commit_file(empty_repo, "README.md", "hello world\n", "Fix readme\n\nRelated to the App launch")
    return empty_repo


@dataclass
class RemoteSetup:
    """A bare remote with two independent clones."""

    remote: Repo
    alice: Repo
    bob: Repo


@pytest.fixture
def remote_setup(tmp_path: Path, commit_file: CommitFile) -> Generator[RemoteSetup, None, None]:
    """A local bare remote whose default branch is main, cloned twice."""
    seed = Repo.init(tmp_path / "seed", initial_branch="main")
    commit_file(seed, "README.md", "seed\n", "Initial commit")

    remote = Repo.clone_from(seed.working_tree_dir, tmp_path / "remote.git", bare=True)
    alice = Repo.clone_from(remote.git_dir, tmp_path / "alice")
    bob = Repo.clone_from(remote.git_dir, tmp_path / "bob")

    yield RemoteSetup(remote=remote, alice=alice, bob=bob)

    for repo in (seed, remote, alice, bob):
        repo.close()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no credentials and defaults everywhere else."""
    return Settings()


@pytest.fixture
def session(test_settings: Settings) -> Generator[GitSession, None, None]:
    """A session with no repository selected."""
    session = GitSession(test_settings)
    yield session
    session.close()


@pytest.fixture
def executor(session: GitSession) -> ToolExecutor:
    """An executor with every built-in tool, approving everything."""
    registry = ToolRegistry()
    register_builtin_tools(registry, session)
    return ToolExecutor(registry=registry, permissions=PermissionManager(auto_approve=True))
