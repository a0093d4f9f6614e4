"""Semantic version file kept at the root of a repository's working tree.

The file holds nothing but the version string, e.g. ``1.4.2``, even though
it is named ``version.json`` by default.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gitpilot.errors import PreconditionFailedError, VersionFormatError
from gitpilot.git.repository import GitRepository

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0.0.0"
DEFAULT_FILE_NAME = "version.json"

SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+")


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse dot-separated integers, returning the first three.

    Raises:
        VersionFormatError: If there are fewer than three components or
            any component is not a non-negative integer.
    """
    parts = text.strip().split(".")
    if len(parts) < 3:
        raise VersionFormatError(text, "expected at least three dot-separated components")
    for part in parts:
        if not part.isdecimal():
            raise VersionFormatError(text, f"component '{part}' is not a number")

    major, minor, patch = (int(p) for p in parts[:3])
    return major, minor, patch


def format_version(major: int, minor: int, patch: int) -> str:
    return f"{major}.{minor}.{patch}"


class VersionStore:
    """Reads and writes the version file.

    Example:
        >>> store = VersionStore(Path("/repo/version.json"))
        >>> store.bump_patch_version()
        '0.0.1'
    """

    def __init__(self, path: Path | str, strict: bool = False):
        """Create a store for the file at ``path``.

        Args:
            path: Location of the version file.
            strict: If True, set_version rejects anything but MAJOR.MINOR.PATCH.
        """
        self.path = Path(path)
        self.strict = strict

    @classmethod
    def for_repository(
        cls,
        repository: GitRepository,
        file_name: str = DEFAULT_FILE_NAME,
        strict: bool = False,
    ) -> "VersionStore":
        """Create a store for the version file in a repository's working tree.

        Raises:
            PreconditionFailedError: If the repository has no working tree.
        """
        if repository.working_tree is None:
            raise PreconditionFailedError("Bare repositories have no version file")
        return cls(repository.working_tree / file_name, strict=strict)

    def ensure_version_file(self) -> Path:
        """Create the file with the default version if it does not exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text(DEFAULT_VERSION, encoding="utf-8")
            logger.info(f"Initialized {self.path} with {DEFAULT_VERSION}")
        return self.path

    def get_current_version(self) -> str:
        """Return the file contents verbatim."""
        self.ensure_version_file()
        return self.path.read_text(encoding="utf-8")

    def bump_patch_version(self) -> str:
        """Increment the patch component and persist it.

        Returns:
            The new version string.
        """
        major, minor, patch = parse_version(self.get_current_version())
        new_version = format_version(major, minor, patch + 1)
        self.path.write_text(new_version, encoding="utf-8")
        logger.info(f"Bumped version to {new_version}")
        return new_version

    def set_version(self, semver: str) -> str:
        """Overwrite the stored version.

        Args:
            semver: New version. Validated as MAJOR.MINOR.PATCH in strict
                mode, written verbatim otherwise.

        Returns:
            The stored value.
        """
        if self.strict and not SEMVER_PATTERN.fullmatch(semver):
            raise VersionFormatError(semver)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(semver, encoding="utf-8")
        logger.info(f"Version set to {semver}")
        return semver
