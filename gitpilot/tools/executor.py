"""Tool executor for running tools with safety guards.

The executor looks a tool up by name, binds and validates its arguments
(filling in declared defaults), checks permissions, runs the handler and
turns whatever happened into a text result for the calling model.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from gitpilot.errors import (
    GitPilotError,
    PermissionDeniedError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)
from gitpilot.models.types import ToolCall, ToolResult
from gitpilot.tools.permissions import PermissionManager
from gitpilot.tools.registry import Tool, ToolRegistry

logger = logging.getLogger(__name__)

# Suggestions keyed by error code, shown to the model after the message
ERROR_SUGGESTIONS = {
    "REPOSITORY_NOT_SET": "Call set_repository with the path of a local Git repository first.",
    "NOT_A_REPOSITORY": "Pass the root of a working tree or its .git directory.",
    "NOT_FOUND": "Use list_commits or find_commits to find a valid commit SHA or branch.",
    "VERSION_FORMAT_ERROR": "Use set_version with a MAJOR.MINOR.PATCH value such as 1.2.3.",
    "MISSING_CREDENTIALS": "Set GIT_PAT (and optionally GIT_USER) in the environment.",
    "PERMISSION_DENIED": "The user did not approve this operation; do not retry it unprompted.",
    "TOOL_VALIDATION_ERROR": "Check the argument names and types in the tool definition.",
    "TOOL_NOT_FOUND": "Only call tools that appear in the tool list.",
}


@dataclass
class ToolExecutionResult:
    """Result of a tool execution.

    Attributes:
        tool_call_id: ID of the tool call that was executed.
        tool_name: Name of the tool that was executed.
        success: Whether execution was successful.
        result: The result value if successful.
        error: Error message if execution failed.
        error_code: Code of the GitPilotError that caused the failure, if any.
        execution_time: Time taken to execute in seconds.
        timestamp: When execution completed.
    """

    tool_call_id: str
    tool_name: str
    success: bool
    result: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    execution_time: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def content(self) -> str:
        """Text rendering of the result or error."""
        if self.success:
            return self._format_result(self.result)
        return self._format_error()

    def to_tool_result(self) -> ToolResult:
        """Convert to a ToolResult for model consumption."""
        return ToolResult(
            tool_call_id=self.tool_call_id,
            content=self.content,
            is_error=not self.success,
        )

    def _format_error(self) -> str:
        lines = [f"Error: {self.error}", f"Tool: {self.tool_name}"]
        suggestion = ERROR_SUGGESTIONS.get(self.error_code or "")
        if suggestion:
            lines.append(f"Suggestion: {suggestion}")
        return "\n".join(lines)

    def _format_result(self, result: Any) -> str:
        if result is None:
            return "Success (no output)"

        if isinstance(result, str):
            return result

        if isinstance(result, (list, dict)):
            try:
                return json.dumps(result, default=str)
            except (TypeError, ValueError):
                return str(result)

        return str(result)


@dataclass
class ToolExecutor:
    """Executes tools with argument validation and permission checks.

    Example:
        >>> executor = ToolExecutor(registry, PermissionManager(auto_approve=True))
        >>> result = executor.call("list_commits", {"count": 5})
        >>> print(result.content)
    """

    registry: ToolRegistry
    permissions: PermissionManager = field(default_factory=PermissionManager)
    max_output_length: int = 100000  # Max characters in a string result

    def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolExecutionResult:
        """Execute a tool by name."""
        return self.execute(ToolCall(name=name, arguments=dict(arguments or {})))

    def execute(self, tool_call: ToolCall) -> ToolExecutionResult:
        """Execute a tool call.

        Domain failures never propagate: they are returned as an
        unsuccessful result so the calling model always receives text.

        Args:
            tool_call: The tool call to execute.

        Returns:
            ToolExecutionResult with success/failure status and result.
        """
        start_time = time.monotonic()
        tool_name = tool_call.name

        def failure(error: str, code: Optional[str] = None) -> ToolExecutionResult:
            return ToolExecutionResult(
                tool_call_id=tool_call.id,
                tool_name=tool_name,
                success=False,
                error=error,
                error_code=code,
                execution_time=time.monotonic() - start_time,
            )

        try:
            tool = self.registry.get_enabled(tool_name)
            if tool is None:
                if self.registry.has(tool_name):
                    raise ToolExecutionError(tool_name, "Tool is disabled")
                raise ToolNotFoundError(tool_name)

            arguments = self._bind_arguments(tool, tool_call.arguments)

            granted = self.permissions.check_permission(
                tool_name=tool_name,
                arguments=arguments,
                permission_level=tool.permission_level,
                description=tool.description,
            )
            if not granted:
                raise PermissionDeniedError(
                    tool_name=tool_name,
                    required_level=tool.permission_level.value,
                    reason="User denied permission",
                )

            result = tool.handler(arguments)

            if isinstance(result, str) and len(result) > self.max_output_length:
                result = (
                    result[: self.max_output_length]
                    + f"\n... (truncated, {len(result)} total characters)"
                )

            execution_time = time.monotonic() - start_time
            logger.info(f"Tool executed successfully: {tool_name} (took {execution_time:.2f}s)")

            return ToolExecutionResult(
                tool_call_id=tool_call.id,
                tool_name=tool_name,
                success=True,
                result=result,
                execution_time=execution_time,
            )

        except GitPilotError as e:
            logger.warning(f"Tool {tool_name} failed: {e.message}")
            return failure(e.message, e.code)

        except Exception as e:
            logger.exception(f"Tool execution error: {tool_name}")
            return failure(f"Execution error: {type(e).__name__}: {e}")

    def execute_batch(self, tool_calls: list[ToolCall]) -> list[ToolExecutionResult]:
        """Execute tool calls one after another, in order."""
        return [self.execute(tc) for tc in tool_calls]

    def _bind_arguments(self, tool: Tool, arguments: dict[str, Any]) -> dict[str, Any]:
        """Validate arguments against the tool definition and apply defaults.

        Raises:
            ToolValidationError: If validation fails.
        """
        definition = tool.definition
        known_params = {p.name for p in definition.parameters}

        for arg_name in arguments:
            if arg_name not in known_params:
                raise ToolValidationError(tool.name, arg_name, "unknown parameter")

        bound: dict[str, Any] = {}
        for param in definition.parameters:
            if param.name not in arguments or arguments[param.name] is None:
                if param.required:
                    raise ToolValidationError(tool.name, param.name, "missing required parameter")
                bound[param.name] = param.default
                continue

            value = arguments[param.name]

            if param.enum and value not in param.enum:
                raise ToolValidationError(
                    tool.name, param.name, f"must be one of: {param.enum}"
                )

            if not self._validate_type(value, param.type):
                raise ToolValidationError(
                    tool.name,
                    param.name,
                    f"expected {param.type}, got {type(value).__name__}",
                )

            bound[param.name] = value

        return bound

    def _validate_type(self, value: Any, expected_type: str) -> bool:
        """Validate a value against an expected JSON Schema type."""
        # bool is a subclass of int but not a JSON integer
        if expected_type in ("integer", "number") and isinstance(value, bool):
            return False

        type_map = {
            "string": str,
            "integer": int,
            "number": (int, float),
            "boolean": bool,
            "array": list,
            "object": dict,
        }

        expected = type_map.get(expected_type)
        if expected is None:
            return True

        return isinstance(value, expected)
