"""Centralized exception hierarchy for GitPilot.

This module defines all custom exceptions used throughout GitPilot,
organized in a hierarchy so callers can catch a whole family at once
(for example every ``GitError``) or a single precise failure.
"""

from __future__ import annotations

from typing import Any, Optional


class GitPilotError(Exception):
    """Base exception for all GitPilot errors.

    Attributes:
        message: Human-readable error message.
        code: Optional error code for programmatic handling.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GitPilotError):
    """Raised when there's a configuration problem."""
    pass


class MissingCredentialsError(ConfigurationError):
    """Raised when a remote operation needs credentials that are not configured."""

    def __init__(self, remote: str, url: str):
        super().__init__(
            message=(
                f"Remote '{remote}' requires credentials: set GIT_PAT "
                "(and optionally GIT_USER) or credentials.token in the config file"
            ),
            code="MISSING_CREDENTIALS",
            details={"remote": remote, "url": url},
        )


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for '{field}': {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value)[:100], "reason": reason},
        )


# =============================================================================
# Git Errors
# =============================================================================

class GitError(GitPilotError):
    """Raised when a git operation fails."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        details = {}
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr[:500]  # Truncate for safety
        super().__init__(message, "GIT_ERROR", details)
        self.returncode = returncode
        self.stderr = stderr


class InvalidInputError(GitError):
    """Raised when a caller supplies an unusable argument."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.code = "INVALID_INPUT"
        if field:
            self.details["field"] = field


class NotARepositoryError(InvalidInputError):
    """Raised when path is not a git repository."""

    def __init__(self, path: str):
        super().__init__(f"Not a valid git repository: {path}", field="path")
        self.details["path"] = path
        self.code = "NOT_A_REPOSITORY"


class PreconditionFailedError(GitError):
    """Raised when an operation needs state that has not been established."""

    def __init__(self, message: str):
        super().__init__(message)
        self.code = "PRECONDITION_FAILED"


class RepositoryNotSetError(PreconditionFailedError):
    """Raised when a repository operation runs before a repository is set."""

    def __init__(self):
        super().__init__("Repository not set - call set_repository first")
        self.code = "REPOSITORY_NOT_SET"


class NotFoundError(GitError):
    """Raised when a commit, branch or other reference cannot be resolved."""

    def __init__(self, message: str, ref: Optional[str] = None):
        super().__init__(message)
        self.code = "NOT_FOUND"
        if ref is not None:
            self.details["ref"] = ref


# =============================================================================
# Version Errors
# =============================================================================

class VersionFormatError(GitPilotError):
    """Raised when a version string is not MAJOR.MINOR.PATCH integers."""

    def __init__(self, value: str, reason: str = "expected MAJOR.MINOR.PATCH"):
        super().__init__(
            message=f"Invalid version '{value[:50]}': {reason}",
            code="VERSION_FORMAT_ERROR",
            details={"value": value[:100], "reason": reason},
        )


# =============================================================================
# Tool Errors
# =============================================================================

class ToolError(GitPilotError):
    """Base exception for tool-related errors."""

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        if tool_name:
            details["tool_name"] = tool_name
        super().__init__(message, code, details)
        self.tool_name = tool_name


class ToolNotFoundError(ToolError):
    """Raised when a requested tool is not found."""

    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Tool '{tool_name}' not found",
            tool_name=tool_name,
            code="TOOL_NOT_FOUND",
        )


class ToolExecutionError(ToolError):
    """Raised when tool execution fails."""

    def __init__(
        self,
        tool_name: str,
        reason: str,
        original_error: Optional[Exception] = None,
    ):
        details = {"reason": reason}
        if original_error:
            details["original_error"] = str(original_error)
            details["original_type"] = type(original_error).__name__
        super().__init__(
            message=f"Tool '{tool_name}' failed: {reason}",
            tool_name=tool_name,
            code="TOOL_EXECUTION_ERROR",
            details=details,
        )
        self.original_error = original_error


class ToolValidationError(ToolError):
    """Raised when tool arguments fail validation."""

    def __init__(
        self,
        tool_name: str,
        parameter: str,
        reason: str,
    ):
        super().__init__(
            message=f"Invalid argument '{parameter}' for tool '{tool_name}': {reason}",
            tool_name=tool_name,
            code="TOOL_VALIDATION_ERROR",
            details={"parameter": parameter, "reason": reason},
        )


class PermissionDeniedError(ToolError):
    """Raised when tool execution is denied due to permissions."""

    def __init__(
        self,
        tool_name: str,
        required_level: str,
        reason: Optional[str] = None,
    ):
        message = f"Permission denied for tool '{tool_name}' (requires {required_level})"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            tool_name=tool_name,
            code="PERMISSION_DENIED",
            details={"required_level": required_level},
        )
        self.reason = reason
