"""Tool registry for managing and discovering tools.

The registry maps tool names to their definitions and handlers, so the
executor can route a call by name and the function-calling layer can list
what is available.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from gitpilot.models.tools import ToolDefinition, ToolParameter
from gitpilot.tools.permissions import PermissionLevel

logger = logging.getLogger(__name__)

# Handlers take a dict of validated arguments and return a str, list or dict
ToolHandler = Callable[[dict[str, Any]], Any]


@dataclass
class Tool:
    """A registered tool with its definition and handler.

    Attributes:
        definition: The tool's schema definition for model consumption.
        handler: The function that executes the tool.
        permission_level: Required permission level for execution.
        description: Human-readable description for confirmation dialogs.
        category: Tool category for organization (e.g., "git", "version").
        enabled: Whether the tool is currently available.
    """

    definition: ToolDefinition
    handler: ToolHandler
    permission_level: PermissionLevel = PermissionLevel.SAFE
    description: str = ""
    category: str = "general"
    enabled: bool = True

    @property
    def name(self) -> str:
        """Get the tool name from its definition."""
        return self.definition.name

    def __post_init__(self) -> None:
        if not self.description:
            self.description = self.definition.description


@dataclass
class ToolRegistry:
    """Registry for managing available tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(Tool(
        ...     definition=ToolDefinition(name="greet", description="Say hello"),
        ...     handler=lambda args: "Hello!",
        ... ))
        >>> registry.get("greet").name
        'greet'
    """

    _tools: dict[str, Tool] = field(default_factory=dict)

    def register(self, tool: Tool) -> None:
        """Register a tool in the registry.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name} (category: {tool.category})")

    def unregister(self, name: str) -> bool:
        """Remove a tool from the registry.

        Returns:
            True if the tool was removed, False if it wasn't registered.
        """
        if self._tools.pop(name, None) is None:
            return False
        logger.debug(f"Unregistered tool: {name}")
        return True

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def get_enabled(self, name: str) -> Optional[Tool]:
        """Get a tool by name, only if it's enabled."""
        tool = self._tools.get(name)
        if tool and tool.enabled:
            return tool
        return None

    def has(self, name: str) -> bool:
        return name in self._tools

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a tool.

        Returns:
            True if the tool exists.
        """
        tool = self._tools.get(name)
        if tool is None:
            return False
        tool.enabled = enabled
        return True

    def list_tools(self, enabled_only: bool = True) -> list[str]:
        """List registered tool names in registration order."""
        return [t.name for t in self.get_all_tools(enabled_only)]

    def list_by_category(self, category: str, enabled_only: bool = True) -> list[str]:
        return [t.name for t in self.get_all_tools(enabled_only) if t.category == category]

    def get_definitions(
        self,
        enabled_only: bool = True,
        categories: Optional[list[str]] = None,
    ) -> list[ToolDefinition]:
        """Get tool definitions for model consumption.

        Args:
            enabled_only: If True, only return enabled tools.
            categories: If provided, filter by these categories.
        """
        return [
            t.definition
            for t in self.get_all_tools(enabled_only)
            if not categories or t.category in categories
        ]

    def get_all_tools(self, enabled_only: bool = True) -> list[Tool]:
        if enabled_only:
            return [t for t in self._tools.values() if t.enabled]
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


def create_tool(
    name: str,
    description: str,
    parameters: list[ToolParameter],
    handler: ToolHandler,
    permission_level: PermissionLevel = PermissionLevel.SAFE,
    category: str = "general",
) -> Tool:
    """Factory function to create a Tool with a ToolDefinition."""
    definition = ToolDefinition(
        name=name,
        description=description,
        parameters=parameters,
    )
    return Tool(
        definition=definition,
        handler=handler,
        permission_level=permission_level,
        category=category,
    )
