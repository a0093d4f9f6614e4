"""Tool system for GitPilot.

This package provides tool registration, execution, and permission
management for AI models calling GitPilot's functions by name.
"""

from gitpilot.tools.builtin import get_builtin_tools, register_builtin_tools
from gitpilot.tools.executor import ToolExecutionResult, ToolExecutor
from gitpilot.tools.permissions import (
    PermissionLevel,
    PermissionManager,
    PermissionRequest,
)
from gitpilot.tools.registry import Tool, ToolHandler, ToolRegistry, create_tool

__all__ = [
    # Registry
    "ToolRegistry",
    "Tool",
    "ToolHandler",
    "create_tool",
    # Executor
    "ToolExecutor",
    "ToolExecutionResult",
    # Permissions
    "PermissionManager",
    "PermissionLevel",
    "PermissionRequest",
    # Builtin tools
    "register_builtin_tools",
    "get_builtin_tools",
]
