"""Git integration for GitPilot.

This package wraps GitPython with the repository operations exposed as
tools: commit queries, diff summaries, commit, pull and push.
"""

from gitpilot.git.credentials import (
    CredentialProvider,
    GitCredentials,
    credential_environment,
    credentials_from_settings,
    settings_credential_provider,
)
from gitpilot.git.repository import (
    CommitRecord,
    DiffSummary,
    GitRepository,
    PullResult,
    PullStatus,
)
from gitpilot.git.utils import (
    is_git_repository,
    open_repository,
    parse_numstat,
    short_sha,
)

__all__ = [
    # Main class
    "GitRepository",
    # Data classes
    "CommitRecord",
    "DiffSummary",
    "PullResult",
    "PullStatus",
    # Credentials
    "CredentialProvider",
    "GitCredentials",
    "credential_environment",
    "credentials_from_settings",
    "settings_credential_provider",
    # Utility functions
    "is_git_repository",
    "open_repository",
    "parse_numstat",
    "short_sha",
]
