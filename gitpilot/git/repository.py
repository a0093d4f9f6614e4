"""Git repository operations for GitPilot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from itertools import islice
from pathlib import Path
from typing import Iterator, Optional

from git import Actor, Commit, PushInfo, Remote, Repo
from git.exc import BadName, BadObject, GitCommandError

from gitpilot.errors import (
    MissingCredentialsError,
    NotFoundError,
    PreconditionFailedError,
)
from gitpilot.git.credentials import CredentialProvider, credential_environment
from gitpilot.git.utils import (
    is_http_url,
    open_repository,
    parse_numstat,
    redact_url,
    short_sha,
    to_git_error,
)

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "ReleaseNotesBot"
DEFAULT_EMAIL = "bot@example.com"


@dataclass
class CommitRecord:
    """A commit as reported to tool callers."""

    sha: str
    message: str
    author: str
    date_utc: datetime

    @classmethod
    def from_commit(cls, commit: Commit) -> "CommitRecord":
        """Build a record from a GitPython commit."""
        return cls(
            sha=short_sha(commit.hexsha),
            message=str(commit.summary),
            author=commit.author.name or "",
            date_utc=commit.authored_datetime.astimezone(timezone.utc),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON shape returned by the commit tools."""
        return {
            "sha": self.sha,
            "message": self.message,
            "author": self.author,
            "dateUtc": self.date_utc.strftime("%Y-%m-%dT%H:%M:%SZ"),
        }


@dataclass
class DiffSummary:
    """File and line counts between two commits."""

    files: int = 0
    added: int = 0
    deleted: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"files": self.files, "added": self.added, "deleted": self.deleted}

    def summary(self) -> str:
        """Get a summary string."""
        if not self.files:
            return "No changes"
        return f"{self.files} file(s) changed, {self.added} insertions(+), {self.deleted} deletions(-)"


class PullStatus(Enum):
    """Outcome of a pull, judged by how HEAD moved."""

    UP_TO_DATE = "up_to_date"
    FAST_FORWARD = "fast_forward"
    MERGED = "merged"


@dataclass
class PullResult:
    """Result of pulling from a remote."""

    status: PullStatus
    old_head: Optional[str] = None
    new_head: Optional[str] = None


class GitRepository:
    """A single opened repository with the operations exposed as tools."""

    def __init__(
        self,
        path: Path | str,
        remote: str = "origin",
        credential_provider: Optional[CredentialProvider] = None,
        network_timeout: Optional[float] = None,
        default_author: str = DEFAULT_AUTHOR,
        default_email: str = DEFAULT_EMAIL,
    ):
        """Open a GitRepository.

        Args:
            path: Working tree root or .git directory of the repository.
            remote: Name of the remote used by pull and push.
            credential_provider: Supplies credentials for HTTP(S) remotes.
            network_timeout: Seconds after which pull/push are killed.
            default_author: Identity used for merge commits created by pull.
            default_email: E-mail used for merge commits created by pull.

        Raises:
            NotARepositoryError: If path is not a valid repository.
        """
        self.path = Path(path).expanduser()
        self.remote_name = remote
        self.credential_provider = credential_provider
        self.network_timeout = network_timeout
        self.default_author = default_author
        self.default_email = default_email
        self._repo: Repo = open_repository(path)

    @property
    def repo(self) -> Repo:
        """The underlying GitPython repository."""
        return self._repo

    @property
    def working_tree(self) -> Optional[Path]:
        """Root of the working tree, or None for a bare repository."""
        if self._repo.working_tree_dir is None:
            return None
        return Path(self._repo.working_tree_dir)

    def close(self) -> None:
        """Release git processes and file handles held by GitPython."""
        self._repo.close()

    # -------------------------------------------------------------------------
    # Commit queries
    # -------------------------------------------------------------------------

    def _iter_commits(self) -> Iterator[Commit]:
        # iter_commits raises ValueError on an unborn HEAD
        if not self._repo.head.is_valid():
            return iter(())
        return self._repo.iter_commits()

    def list_commits(self, count: int = 10) -> list[CommitRecord]:
        """Get the most recent commits reachable from HEAD.

        Args:
            count: Maximum number of commits; non-positive yields none.

        Returns:
            List of CommitRecord in reverse chronological order.
        """
        if count <= 0:
            return []
        return [CommitRecord.from_commit(c) for c in islice(self._iter_commits(), count)]

    def find_commits(self, keyword: str, limit: int = 10) -> list[CommitRecord]:
        """Find commits whose full message contains ``keyword``, ignoring case.

        Args:
            keyword: Text to search for.
            limit: Maximum number of matches.

        Returns:
            Matching commits in traversal order.
        """
        if limit <= 0:
            return []

        needle = keyword.casefold()
        matches = (
            c for c in self._iter_commits()
            if needle in str(c.message).casefold()
        )
        return [CommitRecord.from_commit(c) for c in islice(matches, limit)]

    def resolve_commit(self, ref: str, label: str = "Commit") -> Commit:
        """Resolve a SHA, branch, tag or other revision to a commit.

        Raises:
            NotFoundError: If ``ref`` does not name a commit.
        """
        try:
            return self._repo.commit(ref)
        except (BadName, BadObject, IndexError, ValueError) as e:
            raise NotFoundError(f"{label} commit not found: {ref}", ref=ref) from e

    def compare_commits(self, base: str, head: str) -> DiffSummary:
        """Count files and lines changed between two commits' trees.

        Args:
            base: Older side of the comparison.
            head: Newer side of the comparison.

        Returns:
            DiffSummary from base to head.
        """
        base_commit = self.resolve_commit(base, "Base")
        head_commit = self.resolve_commit(head, "Head")

        try:
            output = self._repo.git.diff(
                "--numstat", "--no-renames", base_commit.hexsha, head_commit.hexsha
            )
        except GitCommandError as e:
            raise to_git_error("Diff", e) from e

        stats = parse_numstat(output)
        return DiffSummary(
            files=len(stats["files"]),
            added=stats["added"],
            deleted=stats["deleted"],
        )

    # -------------------------------------------------------------------------
    # Mutating operations
    # -------------------------------------------------------------------------

    def _require_working_tree(self, action: str) -> Path:
        working_tree = self.working_tree
        if working_tree is None:
            raise PreconditionFailedError(f"Cannot {action} in a bare repository")
        return working_tree

    def commit_all(
        self,
        message: str,
        author: str = DEFAULT_AUTHOR,
        email: str = DEFAULT_EMAIL,
    ) -> CommitRecord:
        """Stage every change in the working tree and commit it.

        With nothing to stage an empty commit is created; GitPython does not
        refuse one the way ``git commit`` does.

        Args:
            message: Commit message.
            author: Name used as both author and committer.
            email: E-mail used as both author and committer.

        Returns:
            The created commit.
        """
        self._require_working_tree("commit")

        try:
            self._repo.git.add(A=True)
        except GitCommandError as e:
            raise to_git_error("Staging", e) from e

        actor = Actor(author, email)
        commit = self._repo.index.commit(message, author=actor, committer=actor)

        logger.info(f"Created commit {short_sha(commit.hexsha)}")
        return CommitRecord.from_commit(commit)

    def current_branch(self) -> str:
        """Get current branch name.

        Raises:
            PreconditionFailedError: If HEAD is detached.
        """
        try:
            return self._repo.active_branch.name
        except TypeError as e:
            raise PreconditionFailedError("HEAD is detached; name a branch explicitly") from e

    def get_remote(self) -> Remote:
        """Get the configured remote.

        Raises:
            PreconditionFailedError: If the remote does not exist.
        """
        try:
            return self._repo.remote(self.remote_name)
        except ValueError as e:
            raise PreconditionFailedError(
                f"Remote '{self.remote_name}' is not configured"
            ) from e

    def _remote_environment(self, remote: Remote) -> dict[str, str]:
        """Build the environment for a network operation against ``remote``."""
        env = {
            "GIT_AUTHOR_NAME": self.default_author,
            "GIT_AUTHOR_EMAIL": self.default_email,
            "GIT_COMMITTER_NAME": self.default_author,
            "GIT_COMMITTER_EMAIL": self.default_email,
        }

        url = remote.url
        if not is_http_url(url):
            return env

        credentials = self.credential_provider() if self.credential_provider else None
        if credentials is None:
            raise MissingCredentialsError(remote.name, redact_url(url))

        logger.debug(f"Authenticating to {redact_url(url)} as {credentials.username}")
        env.update(credential_environment(credentials))
        return env

    def _head_sha(self) -> Optional[str]:
        if not self._repo.head.is_valid():
            return None
        return self._repo.head.commit.hexsha

    def pull(self) -> PullResult:
        """Fetch and merge the current branch from the remote.

        Returns:
            PullResult describing how HEAD moved.
        """
        self._require_working_tree("pull")
        remote = self.get_remote()
        branch = self._repo.active_branch if not self._repo.head.is_detached else None
        if branch is None:
            raise PreconditionFailedError("HEAD is detached; check out a branch before pulling")

        tracking = branch.tracking_branch()
        refspec = tracking.remote_head if tracking is not None else branch.name

        env = self._remote_environment(remote)
        old_head = self._head_sha()

        logger.info(f"Pulling {refspec} from {remote.name}")
        try:
            with self._repo.git.custom_environment(**env):
                remote.pull(
                    refspec,
                    kill_after_timeout=self.network_timeout,
                    no_rebase=True,
                    no_edit=True,
                )
        except GitCommandError as e:
            raise to_git_error("Pull", e) from e

        new_head = self._head_sha()
        if old_head == new_head:
            status = PullStatus.UP_TO_DATE
        elif old_head is not None and len(self._repo.head.commit.parents) > 1 and old_head in {
            p.hexsha for p in self._repo.head.commit.parents
        }:
            status = PullStatus.MERGED
        else:
            status = PullStatus.FAST_FORWARD

        logger.info(f"Pull finished: {status.value}")
        return PullResult(
            status=status,
            old_head=short_sha(old_head) if old_head else None,
            new_head=short_sha(new_head) if new_head else None,
        )

    def push(self, branch: Optional[str] = None) -> str:
        """Push a branch to the remote under the same name.

        Args:
            branch: Branch to push; defaults to the current branch.

        Returns:
            Name of the pushed branch.
        """
        name = branch or self.current_branch()
        if name not in {head.name for head in self._repo.heads}:
            raise NotFoundError(f"Branch not found: {name}", ref=name)

        remote = self.get_remote()
        env = self._remote_environment(remote)

        logger.info(f"Pushing {name} to {remote.name}")
        try:
            with self._repo.git.custom_environment(**env):
                results = remote.push(
                    refspec=f"{name}:{name}",
                    kill_after_timeout=self.network_timeout,
                )
            results.raise_if_error()
        except GitCommandError as e:
            raise to_git_error("Push", e) from e

        for info in results:
            if info.flags & (PushInfo.ERROR | PushInfo.REJECTED | PushInfo.REMOTE_REJECTED):
                raise to_git_error(
                    "Push",
                    GitCommandError(["git", "push"], 1, info.summary.strip()),
                )

        return name
