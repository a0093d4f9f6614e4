"""Permission checks for tool execution.

Read-only repository tools run freely. Tools that write the working tree,
the version file or a remote are gated behind a confirmation callback
unless the manager is configured to auto-approve them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from gitpilot.errors import PermissionDeniedError

logger = logging.getLogger(__name__)


class PermissionLevel(Enum):
    """Permission levels for tool execution.

    Levels are ordered from least to most restrictive:
    - SAFE: read-only, never asks
    - CAUTIOUS: changes local state (commits, version file)
    - DANGEROUS: changes shared state (pushes to a remote)
    - BLOCKED: never allowed
    """

    SAFE = "safe"
    CAUTIOUS = "cautious"
    DANGEROUS = "dangerous"
    BLOCKED = "blocked"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def __lt__(self, other: "PermissionLevel") -> bool:
        return self.rank < other.rank

    def __le__(self, other: "PermissionLevel") -> bool:
        return self.rank <= other.rank


_LEVEL_ORDER = [
    PermissionLevel.SAFE,
    PermissionLevel.CAUTIOUS,
    PermissionLevel.DANGEROUS,
    PermissionLevel.BLOCKED,
]


@dataclass
class PermissionRequest:
    """A request for permission, passed to the confirmation callback."""

    tool_name: str
    arguments: dict[str, Any]
    permission_level: PermissionLevel
    description: str

    def format_for_display(self) -> str:
        """Format the request for user display."""
        lines = [
            f"Tool: {self.tool_name}",
            f"Level: {self.permission_level.value}",
            f"Description: {self.description}",
        ]
        if self.arguments:
            lines.append("Arguments:")
            for key, value in self.arguments.items():
                str_value = str(value)
                if len(str_value) > 100:
                    str_value = str_value[:97] + "..."
                lines.append(f"  {key}: {str_value}")
        return "\n".join(lines)


# Returns True if permission is granted
ConfirmationCallback = Callable[[PermissionRequest], bool]


@dataclass
class PermissionManager:
    """Decides whether a tool may run.

    Example:
        >>> manager = PermissionManager(confirmation_callback=lambda req: True)
        >>> manager.check_permission("push", {}, PermissionLevel.DANGEROUS)
        True
    """

    # Approve everything that isn't blocked
    auto_approve: bool = False

    # Highest level approved without asking
    auto_approve_level: PermissionLevel = PermissionLevel.SAFE

    confirmation_callback: Optional[ConfirmationCallback] = None

    # Tools approved once by the user stay approved
    _session_grants: set[str] = field(default_factory=set)
    _blocked_tools: set[str] = field(default_factory=set)

    def block_tool(self, tool_name: str) -> None:
        self._blocked_tools.add(tool_name)
        self._session_grants.discard(tool_name)
        logger.info(f"Blocked tool: {tool_name}")

    def unblock_tool(self, tool_name: str) -> None:
        self._blocked_tools.discard(tool_name)
        logger.info(f"Unblocked tool: {tool_name}")

    def is_blocked(self, tool_name: str) -> bool:
        return tool_name in self._blocked_tools

    def has_session_permission(self, tool_name: str) -> bool:
        return tool_name in self._session_grants

    def clear_session_grants(self) -> None:
        self._session_grants.clear()

    def check_permission(
        self,
        tool_name: str,
        arguments: dict[str, Any],
        permission_level: PermissionLevel,
        description: str = "",
    ) -> bool:
        """Check if a tool execution is permitted, asking the user if needed.

        Args:
            tool_name: Name of the tool.
            arguments: Arguments for the tool.
            permission_level: The tool's permission level.
            description: Human-readable description of the operation.

        Returns:
            True if execution is permitted.

        Raises:
            PermissionDeniedError: If the tool is blocked.
        """
        if self.is_blocked(tool_name) or permission_level == PermissionLevel.BLOCKED:
            raise PermissionDeniedError(
                tool_name=tool_name,
                required_level=PermissionLevel.BLOCKED.value,
                reason="Tool is blocked",
            )

        if self.auto_approve or permission_level <= self.auto_approve_level:
            logger.debug(f"Auto-approved ({permission_level.value}): {tool_name}")
            return True

        if self.has_session_permission(tool_name):
            return True

        if self.confirmation_callback is None:
            # Nobody to ask, deny
            logger.warning(f"No confirmation callback set, denying: {tool_name}")
            return False

        request = PermissionRequest(
            tool_name=tool_name,
            arguments=arguments,
            permission_level=permission_level,
            description=description or f"Execute tool: {tool_name}",
        )
        granted = self.confirmation_callback(request)

        if granted:
            self._session_grants.add(tool_name)
            logger.info(f"Permission granted by user: {tool_name}")
        else:
            logger.info(f"Permission denied by user: {tool_name}")

        return granted
