"""Credential handling for authenticated remote operations.

Credentials are never written to the repository configuration. They are
handed to the ``git`` process for a single invocation through the
``GIT_CONFIG_COUNT`` family of environment variables, which inject an
``http.extraHeader`` carrying a Basic authorization header.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Callable, Optional

from gitpilot.config import Settings

DEFAULT_USERNAME = "git"


@dataclass(frozen=True)
class GitCredentials:
    """A username/token pair for an HTTP(S) remote."""

    username: str
    token: str

    def __repr__(self) -> str:
        return f"GitCredentials(username={self.username!r}, token='***')"

    def basic_auth_header(self) -> str:
        """Build the value of an HTTP Authorization header."""
        raw = f"{self.username}:{self.token}".encode("utf-8")
        return "Authorization: Basic " + base64.b64encode(raw).decode("ascii")


# Returns None when no credentials are configured
CredentialProvider = Callable[[], Optional[GitCredentials]]


def credentials_from_settings(settings: Settings) -> Optional[GitCredentials]:
    """Read credentials from settings (GIT_USER / GIT_PAT or the config file).

    Args:
        settings: Loaded settings.

    Returns:
        GitCredentials, or None if no token is configured.
    """
    if not settings.git_token:
        return None
    return GitCredentials(
        username=settings.git_username or DEFAULT_USERNAME,
        token=settings.git_token,
    )


def settings_credential_provider(settings: Settings) -> CredentialProvider:
    """Create a provider that reads credentials from ``settings`` on each call."""

    def provider() -> Optional[GitCredentials]:
        return credentials_from_settings(settings)

    return provider


def credential_environment(credentials: GitCredentials) -> dict[str, str]:
    """Environment variables that authenticate one git invocation.

    Args:
        credentials: Credentials to apply.

    Returns:
        Mapping suitable for ``Git.custom_environment``.
    """
    return {
        "GIT_CONFIG_COUNT": "1",
        "GIT_CONFIG_KEY_0": "http.extraHeader",
        "GIT_CONFIG_VALUE_0": credentials.basic_auth_header(),
        "GIT_TERMINAL_PROMPT": "0",
    }
