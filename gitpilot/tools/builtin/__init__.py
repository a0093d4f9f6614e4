"""Built-in tools for GitPilot.

- Git operations (set repository, list/find/compare commits, commit, pull, push)
- Version file operations (get, bump patch, set)
- Echo

Git and version tools are bound to a GitSession.
"""

from gitpilot.session import GitSession
from gitpilot.tools.builtin.echo import create_echo_tool
from gitpilot.tools.builtin.git import (
    create_commit_all_tool,
    create_compare_commits_tool,
    create_find_commits_tool,
    create_list_commits_tool,
    create_pull_tool,
    create_push_tool,
    create_set_repository_tool,
    get_git_tools,
    register_git_tools,
)
from gitpilot.tools.builtin.version import (
    create_bump_patch_version_tool,
    create_get_current_version_tool,
    create_set_version_tool,
    get_version_tools,
)
from gitpilot.tools.registry import Tool, ToolRegistry


def get_builtin_tools(session: GitSession) -> list[Tool]:
    """Get all built-in tools bound to ``session``.

    Args:
        session: Session whose repository the git and version tools use.
            Its settings supply the echo prefix.

    Returns:
        List of Tool instances.
    """
    return [
        *get_git_tools(session),
        *get_version_tools(session),
        create_echo_tool(session.settings.tools.echo_prefix),
    ]


def register_builtin_tools(registry: ToolRegistry, session: GitSession) -> None:
    """Register all built-in tools with a registry."""
    for tool in get_builtin_tools(session):
        registry.register(tool)


__all__ = [
    "register_builtin_tools",
    "get_builtin_tools",
    # Git tool factories
    "create_set_repository_tool",
    "create_list_commits_tool",
    "create_find_commits_tool",
    "create_compare_commits_tool",
    "create_commit_all_tool",
    "create_pull_tool",
    "create_push_tool",
    "get_git_tools",
    "register_git_tools",
    # Version tool factories
    "create_get_current_version_tool",
    "create_bump_patch_version_tool",
    "create_set_version_tool",
    "get_version_tools",
    # Echo
    "create_echo_tool",
]
