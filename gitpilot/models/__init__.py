"""Tool schemas and call/result types for GitPilot."""

from gitpilot.models.tools import (
    GIT_TOOLS,
    TOOL_FORMATS,
    VERSION_TOOLS,
    ToolDefinition,
    ToolParameter,
)
from gitpilot.models.types import ToolCall, ToolResult

__all__ = [
    "GIT_TOOLS",
    "TOOL_FORMATS",
    "VERSION_TOOLS",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
    "ToolResult",
]
