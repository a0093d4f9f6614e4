"""Git repository tools for GitPilot.

Every tool is bound to a GitSession. ``set_repository`` selects the
repository; the others raise RepositoryNotSetError until it has succeeded.
Queries return JSON text, mutating tools return a confirmation line.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from gitpilot.models.tools import (
    COMPARE_COMMITS_TOOL,
    FIND_COMMITS_TOOL,
    LIST_COMMITS_TOOL,
    PULL_TOOL,
    PUSH_TOOL,
    SET_REPOSITORY_TOOL,
    commit_all_definition,
)
from gitpilot.session import GitSession
from gitpilot.tools.permissions import PermissionLevel
from gitpilot.tools.registry import Tool

logger = logging.getLogger(__name__)


def create_set_repository_tool(session: GitSession) -> Tool:
    """Create a tool that selects the session's repository.

    Args:
        session: Session the tool operates on.

    Returns:
        Configured Tool instance.
    """

    def handler(args: dict[str, Any]) -> str:
        return session.set_repository(args["path"])

    return Tool(
        definition=SET_REPOSITORY_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="git",
        description="Select the repository to work on",
    )


def create_list_commits_tool(session: GitSession) -> Tool:
    """Create a tool listing the latest commits."""

    def handler(args: dict[str, Any]) -> str:
        commits = session.repository.list_commits(args["count"])
        return json.dumps([c.to_dict() for c in commits])

    return Tool(
        definition=LIST_COMMITS_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="git",
        description="Show commit history",
    )


def create_find_commits_tool(session: GitSession) -> Tool:
    """Create a tool searching commit messages."""

    def handler(args: dict[str, Any]) -> str:
        commits = session.repository.find_commits(args["keyword"], args["limit"])
        return json.dumps([c.to_dict() for c in commits])

    return Tool(
        definition=FIND_COMMITS_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="git",
        description="Search commit messages",
    )


def create_compare_commits_tool(session: GitSession) -> Tool:
    """Create a tool reporting diff statistics between two commits."""

    def handler(args: dict[str, Any]) -> str:
        summary = session.repository.compare_commits(args["base"], args["head"])
        return json.dumps(summary.to_dict())

    return Tool(
        definition=COMPARE_COMMITS_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="git",
        description="Compare two commits",
    )


def create_commit_all_tool(session: GitSession) -> Tool:
    """Create a tool that stages everything and commits it.

    The author and e-mail default to the session's configured identity.

    Args:
        session: Session the tool operates on.

    Returns:
        Configured Tool instance.
    """

    def handler(args: dict[str, Any]) -> str:
        commit = session.repository.commit_all(
            args["message"],
            author=args["author"],
            email=args["email"],
        )
        return f"Created commit {commit.sha}"

    git_config = session.settings.git
    return Tool(
        definition=commit_all_definition(git_config.default_author, git_config.default_email),
        handler=handler,
        permission_level=PermissionLevel.CAUTIOUS,
        category="git",
        description="Stage all changes and commit",
    )


def create_pull_tool(session: GitSession) -> Tool:
    """Create a tool pulling from the configured remote."""

    def handler(args: dict[str, Any]) -> str:
        result = session.repository.pull()
        return f"Pull result: {result.status.value}"

    return Tool(
        definition=PULL_TOOL,
        handler=handler,
        permission_level=PermissionLevel.CAUTIOUS,
        category="git",
        description="Pull from the remote",
    )


def create_push_tool(session: GitSession) -> Tool:
    """Create a tool pushing a branch to the configured remote."""

    def handler(args: dict[str, Any]) -> str:
        repository = session.repository
        branch = repository.push(args.get("branch"))
        return f"Pushed {branch} to {repository.remote_name}"

    # Pushing publishes history, always confirm
    return Tool(
        definition=PUSH_TOOL,
        handler=handler,
        permission_level=PermissionLevel.DANGEROUS,
        category="git",
        description="Push a branch to the remote",
    )


def get_git_tools(session: GitSession) -> list[Tool]:
    """Get all git tools bound to ``session``."""
    return [
        create_set_repository_tool(session),
        create_list_commits_tool(session),
        create_find_commits_tool(session),
        create_compare_commits_tool(session),
        create_commit_all_tool(session),
        create_pull_tool(session),
        create_push_tool(session),
    ]


def register_git_tools(registry, session: GitSession) -> None:
    """Register all git tools with a registry."""
    for tool in get_git_tools(session):
        registry.register(tool)
