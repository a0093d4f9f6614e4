"""Tests for the exception hierarchy."""

from gitpilot.errors import (
    ConfigurationError,
    GitError,
    GitPilotError,
    InvalidConfigError,
    InvalidInputError,
    MissingCredentialsError,
    NotARepositoryError,
    NotFoundError,
    PermissionDeniedError,
    PreconditionFailedError,
    RepositoryNotSetError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
    VersionFormatError,
)


class TestGitPilotError:
    """Tests for the base exception."""

    def test_str_with_code(self):
        error = GitPilotError("Something broke", code="BROKEN")
        assert str(error) == "[BROKEN] Something broke"

    def test_str_without_code(self):
        assert str(GitPilotError("Plain")) == "Plain"

    def test_to_dict(self):
        error = NotFoundError("Branch not found: x", ref="x")

        assert error.to_dict() == {
            "error_type": "NotFoundError",
            "message": "Branch not found: x",
            "code": "NOT_FOUND",
            "details": {"ref": "x"},
        }


class TestHierarchy:
    """Tests for how the exceptions relate."""

    def test_git_family(self):
        for error in (
            InvalidInputError("bad"),
            NotARepositoryError("/tmp/x"),
            PreconditionFailedError("no"),
            RepositoryNotSetError(),
            NotFoundError("missing"),
        ):
            assert isinstance(error, GitError)
            assert isinstance(error, GitPilotError)

    def test_specific_codes(self):
        assert NotARepositoryError("/x").code == "NOT_A_REPOSITORY"
        assert isinstance(NotARepositoryError("/x"), InvalidInputError)
        assert RepositoryNotSetError().code == "REPOSITORY_NOT_SET"
        assert isinstance(RepositoryNotSetError(), PreconditionFailedError)
        assert InvalidInputError("bad", field="path").details == {"field": "path"}

    def test_configuration_family(self):
        assert isinstance(MissingCredentialsError("origin", "https://x"), ConfigurationError)
        assert isinstance(InvalidConfigError("git.remote", "", "empty"), ConfigurationError)

    def test_tool_family(self):
        for error in (
            ToolNotFoundError("x"),
            ToolExecutionError("x", "failed"),
            ToolValidationError("x", "p", "bad"),
            PermissionDeniedError("x", "dangerous"),
        ):
            assert isinstance(error, ToolError)
            assert error.details["tool_name"] == "x"

    def test_version_error_not_git_error(self):
        assert not isinstance(VersionFormatError("1.x"), GitError)


class TestDetails:
    """Tests for error messages and details."""

    def test_git_error_keeps_output(self):
        error = GitError("Push failed", returncode=1, stderr="x" * 1000)

        assert error.code == "GIT_ERROR"
        assert error.returncode == 1
        assert len(error.details["stderr"]) == 500
        assert error.stderr == "x" * 1000

    def test_missing_credentials(self):
        error = MissingCredentialsError("origin", "https://example.com/r.git")

        assert "GIT_PAT" in error.message
        assert error.details == {"remote": "origin", "url": "https://example.com/r.git"}

    def test_version_format_error(self):
        error = VersionFormatError("banana")

        assert error.message == "Invalid version 'banana': expected MAJOR.MINOR.PATCH"
        assert error.details["value"] == "banana"

    def test_tool_execution_error_original(self):
        original = ValueError("inner")

        error = ToolExecutionError("push", "crashed", original_error=original)

        assert error.original_error is original
        assert error.details["original_type"] == "ValueError"

    def test_permission_denied_message(self):
        error = PermissionDeniedError("push", "dangerous", reason="User denied permission")
        assert error.message == "Permission denied for tool 'push' (requires dangerous): User denied permission"
