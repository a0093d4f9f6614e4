"""Git utility functions for GitPilot."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from gitpilot.errors import GitError, NotARepositoryError

logger = logging.getLogger(__name__)

SHORT_SHA_LENGTH = 7

_CREDENTIALS_IN_URL = re.compile(r"(?P<scheme>https?://)[^/@\s]+@")


def short_sha(hexsha: str) -> str:
    """Abbreviate a full commit hash to its first seven characters."""
    return hexsha[:SHORT_SHA_LENGTH]


def open_repository(path: Path | str) -> Repo:
    """Open the repository rooted at ``path``.

    ``path`` may be the working tree root or the ``.git`` directory itself.
    Parent directories are not searched.

    Args:
        path: Path to the repository.

    Returns:
        GitPython Repo instance.

    Raises:
        NotARepositoryError: If ``path`` does not hold a valid repository.
    """
    if not str(path).strip():
        raise NotARepositoryError(str(path))

    resolved = Path(path).expanduser()
    try:
        return Repo(resolved)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise NotARepositoryError(str(path)) from e


def is_git_repository(path: Path | str) -> bool:
    """Check if a path holds a git repository (parents are not searched)."""
    try:
        open_repository(path).close()
    except NotARepositoryError:
        return False
    return True


def parse_numstat(output: str) -> dict:
    """Extract statistics from ``git diff --numstat`` output.

    Each line looks like ``added<TAB>deleted<TAB>path``; binary files report
    ``-`` for both counts and contribute no lines.

    Args:
        output: Output from git diff --numstat.

    Returns:
        Dictionary with ``files`` (list of paths), ``added`` and ``deleted``.
    """
    files: list[str] = []
    added = 0
    deleted = 0

    for line in output.splitlines():
        parts = line.split("\t", 2)
        if len(parts) != 3:
            continue

        ins, dels, filename = parts
        files.append(filename)
        if ins.isdigit():
            added += int(ins)
        if dels.isdigit():
            deleted += int(dels)

    return {"files": files, "added": added, "deleted": deleted}


def is_http_url(url: str) -> bool:
    """Check whether a remote URL uses HTTP(S) transport."""
    return url.lower().startswith(("http://", "https://"))


def redact_url(url: str) -> str:
    """Strip any ``user:password@`` portion from an HTTP(S) URL."""
    return _CREDENTIALS_IN_URL.sub(r"\g<scheme>***@", url)


def _unwrap_stderr(stderr: str) -> str:
    """Strip GitPython's ``stderr: '...'`` wrapper from captured output."""
    text = stderr.strip()
    if text.startswith("stderr:"):
        text = text.removeprefix("stderr:").strip()
        if len(text) >= 2 and text[0] == text[-1] == "'":
            text = text[1:-1]
    return text.strip()


def _summary_line(stderr: str) -> str:
    """Pick the line that names the cause of a git failure."""
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    for line in lines:
        if line.startswith(("error:", "fatal:")):
            return line
    return lines[-1] if lines else ""


def to_git_error(action: str, error: GitCommandError) -> GitError:
    """Convert a GitPython command failure into a GitError.

    Args:
        action: Short description of what was attempted, e.g. "Push".
        error: The GitPython exception.

    Returns:
        GitError carrying the exit status and stderr.
    """
    stderr = _unwrap_stderr(redact_url(str(error.stderr or "")))
    returncode: Optional[int] = error.status if isinstance(error.status, int) else None

    message = f"{action} failed"
    summary = _summary_line(stderr)
    if summary:
        message = f"{message}: {summary}"

    logger.debug(f"{action} failed with status {returncode}")
    return GitError(message, returncode=returncode, stderr=stderr or None)
