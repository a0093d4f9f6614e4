"""Tests for the echo tool."""

from gitpilot.config import Settings
from gitpilot.session import GitSession
from gitpilot.tools import PermissionLevel, ToolExecutor, get_builtin_tools
from gitpilot.tools.builtin.echo import create_echo_tool


class TestEchoTool:
    """Tests for the echo tool."""

    def test_echo(self, executor: ToolExecutor):
        assert executor.call("echo", {"text": "hello"}).content == "You said: hello"

    def test_echo_empty(self, executor: ToolExecutor):
        assert executor.call("echo", {"text": ""}).content == "You said: "

    def test_echo_needs_no_repository(self, executor: ToolExecutor):
        assert executor.call("echo", {"text": "x"}).success

    def test_custom_prefix(self):
        tool = create_echo_tool(prefix="")
        assert tool.handler({"text": "plain"}) == "plain"
        assert tool.permission_level == PermissionLevel.SAFE

    def test_prefix_from_settings(self):
        session = GitSession(Settings(tools={"echo_prefix": "> "}))
        echo = [t for t in get_builtin_tools(session) if t.name == "echo"][0]
        assert echo.handler({"text": "hi"}) == "> hi"
