"""Tests for tool definitions and call/result types."""

import pytest

from gitpilot.models import (
    GIT_TOOLS,
    TOOL_FORMATS,
    VERSION_TOOLS,
    ToolCall,
    ToolDefinition,
    ToolParameter,
    ToolResult,
)
from gitpilot.models.tools import COMMIT_ALL_TOOL, LIST_COMMITS_TOOL, PUSH_TOOL, commit_all_definition


class TestToolParameter:
    """Tests for ToolParameter."""

    def test_basic_schema(self):
        param = ToolParameter(name="path", type="string", description="A path")
        assert param.to_json_schema() == {"type": "string", "description": "A path"}

    def test_schema_with_default_and_enum(self):
        param = ToolParameter(
            name="mode",
            type="string",
            description="Mode",
            required=False,
            default="fast",
            enum=["fast", "slow"],
        )

        schema = param.to_json_schema()

        assert schema["default"] == "fast"
        assert schema["enum"] == ["fast", "slow"]


class TestToolDefinition:
    """Tests for ToolDefinition conversions."""

    def test_to_anthropic(self):
        result = COMMIT_ALL_TOOL.to_anthropic()

        assert result["name"] == "commit_all"
        schema = result["input_schema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["message"]
        assert schema["properties"]["author"]["default"] == "ReleaseNotesBot"
        assert schema["properties"]["email"]["default"] == "bot@example.com"

    def test_to_openai(self):
        result = LIST_COMMITS_TOOL.to_openai()

        assert result["type"] == "function"
        assert result["function"]["name"] == "list_commits"
        params = result["function"]["parameters"]
        assert params["properties"]["count"] == {
            "type": "integer",
            "description": "How many commits to retrieve",
            "default": 10,
        }
        assert "required" not in params

    def test_to_google(self):
        result = PUSH_TOOL.to_google()

        assert result["name"] == "push"
        assert result["parameters"]["properties"]["branch"]["type"] == "string"

    def test_no_parameters(self):
        definition = ToolDefinition(name="pull", description="Pull")
        assert definition.to_anthropic()["input_schema"] == {"type": "object", "properties": {}}

    @pytest.mark.parametrize("provider", TOOL_FORMATS)
    def test_to_format(self, provider: str):
        assert LIST_COMMITS_TOOL.to_format(provider)

    def test_to_format_unknown(self):
        with pytest.raises(ValueError, match="Unknown tool format"):
            LIST_COMMITS_TOOL.to_format("cobol")

    def test_get_parameter(self):
        assert COMMIT_ALL_TOOL.get_parameter("email").required is False
        assert COMMIT_ALL_TOOL.get_parameter("missing") is None


class TestToolCatalog:
    """Tests for the shipped tool definitions."""

    def test_names_unique(self):
        names = [d.name for d in GIT_TOOLS + VERSION_TOOLS]
        assert len(names) == len(set(names)) == 10

    def test_all_have_descriptions(self):
        for definition in GIT_TOOLS + VERSION_TOOLS:
            assert definition.description
            for param in definition.parameters:
                assert param.description

    def test_commit_all_identity_defaults(self):
        definition = commit_all_definition("Jane", "jane@example.com")

        schema = definition.to_openai()["function"]["parameters"]

        assert schema["properties"]["author"]["default"] == "Jane"
        assert schema["properties"]["email"]["default"] == "jane@example.com"
        assert schema["required"] == ["message"]


class TestTypes:
    """Tests for ToolCall and ToolResult."""

    def test_tool_call_generates_id(self):
        first = ToolCall(name="echo", arguments={"text": "x"})
        second = ToolCall(name="echo")

        assert first.id.startswith("call_")
        assert first.id != second.id
        assert second.arguments == {}

    def test_tool_result_defaults(self):
        result = ToolResult(tool_call_id="call_1", content="ok")
        assert result.is_error is False
