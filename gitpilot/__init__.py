"""GitPilot - Git and semantic-version tools for LLM function calling."""

__version__ = "0.1.0"
