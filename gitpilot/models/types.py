"""Request/response types exchanged with the function-calling layer."""

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCall:
    """A tool call made by an AI model."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: f"call_{uuid.uuid4().hex[:12]}")


@dataclass
class ToolResult:
    """Result from executing a tool."""

    tool_call_id: str
    content: str
    is_error: bool = False
