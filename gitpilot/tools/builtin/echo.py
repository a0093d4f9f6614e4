"""Echo tool, the smallest useful example of a tool."""

from typing import Any

from gitpilot.models.tools import ECHO_TOOL
from gitpilot.tools.permissions import PermissionLevel
from gitpilot.tools.registry import Tool

DEFAULT_PREFIX = "You said: "


def create_echo_tool(prefix: str = DEFAULT_PREFIX) -> Tool:
    """Create a tool that returns its input, prefixed with ``prefix``."""

    def handler(args: dict[str, Any]) -> str:
        return f"{prefix}{args['text']}"

    return Tool(
        definition=ECHO_TOOL,
        handler=handler,
        permission_level=PermissionLevel.SAFE,
        category="general",
    )
