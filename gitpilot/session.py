"""Per-caller state: the repository tools operate on.

Each ``GitSession`` owns at most one open repository. Tools are bound to a
session when they are created, so two sessions never see each other's
repository.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from gitpilot.config import Settings, get_settings
from gitpilot.errors import RepositoryNotSetError
from gitpilot.git.credentials import CredentialProvider, settings_credential_provider
from gitpilot.git.repository import GitRepository
from gitpilot.versioning import VersionStore

logger = logging.getLogger(__name__)


class GitSession:
    """Holds the repository selected by ``set_repository``."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        credential_provider: Optional[CredentialProvider] = None,
    ):
        self.settings = settings or get_settings()
        self.credential_provider = credential_provider or settings_credential_provider(
            self.settings
        )
        self._repository: Optional[GitRepository] = None

    @property
    def has_repository(self) -> bool:
        return self._repository is not None

    @property
    def repository(self) -> GitRepository:
        """The current repository.

        Raises:
            RepositoryNotSetError: If set_repository has not succeeded yet.
        """
        if self._repository is None:
            raise RepositoryNotSetError()
        return self._repository

    def set_repository(self, path: Path | str) -> str:
        """Open ``path`` and make it the session's repository.

        The previous repository, if any, is closed. On failure the previous
        repository stays selected.

        Raises:
            NotARepositoryError: If path is not a valid repository.
        """
        git_config = self.settings.git
        repository = GitRepository(
            path,
            remote=git_config.remote,
            credential_provider=self.credential_provider,
            network_timeout=git_config.network_timeout,
            default_author=git_config.default_author,
            default_email=git_config.default_email,
        )

        if self._repository is not None:
            self._repository.close()
        self._repository = repository

        logger.info(f"Repository set to {path}")
        return f"Repository set to {path}"

    def version_store(self) -> VersionStore:
        """Get the version file store for the current repository."""
        versioning = self.settings.versioning
        return VersionStore.for_repository(
            self.repository,
            file_name=versioning.file_name,
            strict=versioning.strict,
        )

    def close(self) -> None:
        """Close the current repository, leaving the session unset."""
        if self._repository is not None:
            self._repository.close()
            self._repository = None
