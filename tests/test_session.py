"""Tests for GitSession."""

from pathlib import Path

import pytest
from git import Repo

from gitpilot.config import Settings
from gitpilot.errors import (
    InvalidInputError,
    NotARepositoryError,
    PreconditionFailedError,
    RepositoryNotSetError,
)
from gitpilot.git.credentials import GitCredentials
from gitpilot.session import GitSession


class TestRepositoryHandle:
    """Tests for selecting a repository."""

    def test_unset_by_default(self, session: GitSession):
        assert session.has_repository is False
        with pytest.raises(RepositoryNotSetError) as exc_info:
            session.repository
        assert exc_info.value.message == "Repository not set - call set_repository first"
        assert isinstance(exc_info.value, PreconditionFailedError)

    def test_set_repository(self, session: GitSession, git_repo: Repo):
        path = git_repo.working_tree_dir

        message = session.set_repository(path)

        assert message == f"Repository set to {path}"
        assert session.has_repository is True
        assert session.repository.list_commits(0) == []

    def test_invalid_path_keeps_previous(self, session: GitSession, git_repo: Repo, tmp_path: Path):
        """Test a failed set leaves the earlier repository selected."""
        session.set_repository(git_repo.working_tree_dir)
        previous = session.repository

        with pytest.raises(NotARepositoryError):
            session.set_repository(tmp_path / "missing")

        assert session.repository is previous

    @pytest.mark.parametrize("path", ["", "   "])
    def test_blank_path_rejected(
        self, session: GitSession, git_repo: Repo, path: str, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a blank path never falls back to the current directory."""
        monkeypatch.chdir(git_repo.working_tree_dir)

        with pytest.raises(InvalidInputError):
            session.set_repository(path)

        assert session.has_repository is False

    def test_replaces_repository(self, session: GitSession, git_repo: Repo, tmp_path: Path):
        other = Repo.init(tmp_path / "other", initial_branch="main")
        session.set_repository(git_repo.working_tree_dir)

        session.set_repository(other.working_tree_dir)

        assert session.repository.path == Path(other.working_tree_dir)
        assert session.repository.list_commits() == []
        other.close()

    def test_close(self, session: GitSession, git_repo: Repo):
        session.set_repository(git_repo.working_tree_dir)

        session.close()

        assert session.has_repository is False

    def test_sessions_are_independent(self, test_settings: Settings, git_repo: Repo):
        first = GitSession(test_settings)
        second = GitSession(test_settings)

        first.set_repository(git_repo.working_tree_dir)

        assert first.has_repository is True
        assert second.has_repository is False
        first.close()


class TestSessionConfiguration:
    """Tests for settings flowing into the repository."""

    def test_git_settings_applied(self, git_repo: Repo):
        settings = Settings(
            git={"remote": "upstream", "default_author": "Bot", "network_timeout": 5}
        )
        session = GitSession(settings)

        session.set_repository(git_repo.working_tree_dir)

        repository = session.repository
        assert repository.remote_name == "upstream"
        assert repository.default_author == "Bot"
        assert repository.network_timeout == 5
        session.close()

    def test_credential_provider_from_settings(self):
        session = GitSession(Settings(git_username="alice", git_token="tok"))
        assert session.credential_provider() == GitCredentials("alice", "tok")

    def test_explicit_credential_provider(self):
        creds = GitCredentials("bob", "other")
        session = GitSession(Settings(), credential_provider=lambda: creds)
        assert session.credential_provider() is creds

    def test_version_store_requires_repository(self, session: GitSession):
        with pytest.raises(RepositoryNotSetError):
            session.version_store()

    def test_version_store_uses_settings(self, git_repo: Repo):
        session = GitSession(Settings(versioning={"file_name": "VERSION", "strict": True}))
        session.set_repository(git_repo.working_tree_dir)

        store = session.version_store()

        assert store.path == Path(git_repo.working_tree_dir) / "VERSION"
        assert store.strict is True
        session.close()
