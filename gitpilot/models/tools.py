"""Tool definitions with provider-specific translations."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ToolParameter:
    """A parameter for a tool."""

    name: str
    type: str  # 'string', 'integer', 'number', 'boolean', 'array', 'object'
    description: str
    required: bool = True
    default: Any = None  # Applied by the executor when an optional argument is omitted
    enum: Optional[list[str]] = None

    def to_json_schema(self) -> dict[str, Any]:
        """Convert to JSON Schema format."""
        schema: dict[str, Any] = {
            "type": self.type,
            "description": self.description,
        }
        if self.default is not None:
            schema["default"] = self.default
        if self.enum:
            schema["enum"] = self.enum
        return schema


@dataclass
class ToolDefinition:
    """Definition of a tool that can be called by models."""

    name: str
    description: str
    parameters: list[ToolParameter] = field(default_factory=list)

    def get_parameter(self, name: str) -> Optional[ToolParameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def _build_json_schema(self) -> dict[str, Any]:
        """Build JSON schema for parameters."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_json_schema()
            if param.required:
                required.append(param.name)

        schema: dict[str, Any] = {
            "type": "object",
            "properties": properties,
        }
        if required:
            schema["required"] = required

        return schema

    def to_anthropic(self) -> dict[str, Any]:
        """Convert to Anthropic tool format.

        Anthropic format:
        {
            "name": "tool_name",
            "description": "tool description",
            "input_schema": {
                "type": "object",
                "properties": {...},
                "required": [...]
            }
        }
        """
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self._build_json_schema(),
        }

    def to_openai(self) -> dict[str, Any]:
        """Convert to OpenAI function/tool format.

        OpenAI format:
        {
            "type": "function",
            "function": {
                "name": "tool_name",
                "description": "tool description",
                "parameters": {...}
            }
        }
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self._build_json_schema(),
            },
        }

    def to_google(self) -> dict[str, Any]:
        """Convert to Google Gemini function declaration format."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self._build_json_schema(),
        }

    def to_format(self, provider: str) -> dict[str, Any]:
        """Convert to the named provider's format ("anthropic", "openai" or "google")."""
        converters = {
            "anthropic": self.to_anthropic,
            "openai": self.to_openai,
            "google": self.to_google,
        }
        if provider not in converters:
            raise ValueError(f"Unknown tool format: {provider}")
        return converters[provider]()


TOOL_FORMATS = ["anthropic", "openai", "google"]


# Repository tools
SET_REPOSITORY_TOOL = ToolDefinition(
    name="set_repository",
    description="Set the working repository path",
    parameters=[
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path to a local Git repository",
        ),
    ],
)

LIST_COMMITS_TOOL = ToolDefinition(
    name="list_commits",
    description="Get latest commits as JSON",
    parameters=[
        ToolParameter(
            name="count",
            type="integer",
            description="How many commits to retrieve",
            required=False,
            default=10,
        ),
    ],
)

FIND_COMMITS_TOOL = ToolDefinition(
    name="find_commits",
    description="Find commits whose message contains a keyword (case-insensitive)",
    parameters=[
        ToolParameter(
            name="keyword",
            type="string",
            description="Keyword to search",
        ),
        ToolParameter(
            name="limit",
            type="integer",
            description="Max results",
            required=False,
            default=10,
        ),
    ],
)

COMPARE_COMMITS_TOOL = ToolDefinition(
    name="compare_commits",
    description="Show diff-stats (files, lines added, lines deleted) between two commits",
    parameters=[
        ToolParameter(
            name="base",
            type="string",
            description="Older commit SHA or reference",
        ),
        ToolParameter(
            name="head",
            type="string",
            description="Newer commit SHA or reference",
        ),
    ],
)


def commit_all_definition(author: str, email: str) -> ToolDefinition:
    """Build the commit_all definition with the given identity as defaults."""
    return ToolDefinition(
        name="commit_all",
        description="Stage all changes and create a commit",
        parameters=[
            ToolParameter(
                name="message",
                type="string",
                description="Commit message",
            ),
            ToolParameter(
                name="author",
                type="string",
                description="Committer name",
                required=False,
                default=author,
            ),
            ToolParameter(
                name="email",
                type="string",
                description="Committer e-mail",
                required=False,
                default=email,
            ),
        ],
    )


COMMIT_ALL_TOOL = commit_all_definition("ReleaseNotesBot", "bot@example.com")

PULL_TOOL = ToolDefinition(
    name="pull",
    description="Pull latest changes from the remote",
)

PUSH_TOOL = ToolDefinition(
    name="push",
    description="Push a branch to the remote",
    parameters=[
        ToolParameter(
            name="branch",
            type="string",
            description="Branch to push (defaults to current)",
            required=False,
        ),
    ],
)

# Version tools
GET_CURRENT_VERSION_TOOL = ToolDefinition(
    name="get_current_version",
    description="Retrieve the currently stored version",
)

BUMP_PATCH_VERSION_TOOL = ToolDefinition(
    name="bump_patch_version",
    description="Increment patch version and return new semver",
)

SET_VERSION_TOOL = ToolDefinition(
    name="set_version",
    description="Force-set the version to MAJOR.MINOR.PATCH",
    parameters=[
        ToolParameter(
            name="semver",
            type="string",
            description="Version in semantic-version format",
        ),
    ],
)

ECHO_TOOL = ToolDefinition(
    name="echo",
    description="Echoes back whatever you send in",
    parameters=[
        ToolParameter(
            name="text",
            type="string",
            description="Text to echo",
        ),
    ],
)

GIT_TOOLS = [
    SET_REPOSITORY_TOOL,
    LIST_COMMITS_TOOL,
    FIND_COMMITS_TOOL,
    COMPARE_COMMITS_TOOL,
    COMMIT_ALL_TOOL,
    PULL_TOOL,
    PUSH_TOOL,
]

VERSION_TOOLS = [
    GET_CURRENT_VERSION_TOOL,
    BUMP_PATCH_VERSION_TOOL,
    SET_VERSION_TOOL,
]
