"""Semantic version tools backed by the repository's version file."""

from __future__ import annotations

from typing import Any

from gitpilot.models.tools import (
    BUMP_PATCH_VERSION_TOOL,
    GET_CURRENT_VERSION_TOOL,
    SET_VERSION_TOOL,
)
from gitpilot.session import GitSession
from gitpilot.tools.permissions import PermissionLevel
from gitpilot.tools.registry import Tool


def create_get_current_version_tool(session: GitSession) -> Tool:
    def handler(args: dict[str, Any]) -> str:
        return session.version_store().get_current_version()

    return Tool(
        definition=GET_CURRENT_VERSION_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="version",
    )


def create_bump_patch_version_tool(session: GitSession) -> Tool:
    def handler(args: dict[str, Any]) -> str:
        return session.version_store().bump_patch_version()

    return Tool(
        definition=BUMP_PATCH_VERSION_TOOL,
        handler=handler,
        permission_level=PermissionLevel.CAUTIOUS,
        category="version",
    )


def create_set_version_tool(session: GitSession) -> Tool:
    def handler(args: dict[str, Any]) -> str:
        version = session.version_store().set_version(args["semver"])
        return f"Version set to {version}"

    return Tool(
        definition=SET_VERSION_TOOL,
        handler=handler,
        permission_level=PermissionLevel.CAUTIOUS,
        category="version",
    )


def get_version_tools(session: GitSession) -> list[Tool]:
    return [
        create_get_current_version_tool(session),
        create_bump_patch_version_tool(session),
        create_set_version_tool(session),
    ]
