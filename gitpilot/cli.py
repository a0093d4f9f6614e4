"""CLI entry point for GitPilot."""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from gitpilot import __version__
from gitpilot.config import CONFIG_FILE, create_default_config, get_settings, load_settings
from gitpilot.errors import InvalidConfigError
from gitpilot.models.tools import TOOL_FORMATS, ToolDefinition
from gitpilot.session import GitSession
from gitpilot.tools import (
    PermissionManager,
    PermissionRequest,
    ToolExecutor,
    ToolRegistry,
    register_builtin_tools,
)
from gitpilot.utils.logging import setup_logging

app = typer.Typer(
    name="gitpilot",
    help="Git and semantic-version tools for LLM function calling",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]GitPilot[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """GitPilot - call Git and version tools by name."""
    try:
        settings = load_settings(config_path=config, force_reload=True)
    except InvalidConfigError as e:
        err_console.print(e.message, style="red", markup=False, highlight=False)
        raise typer.Exit(1)
    setup_logging(
        level=settings.logging.level,
        log_file=settings.logging.resolved_file,
        verbose=verbose,
    )


def _build_executor(session: GitSession, assume_yes: bool) -> ToolExecutor:
    """Create a registry and executor for ``session``."""
    settings = session.settings

    registry = ToolRegistry()
    register_builtin_tools(registry, session)

    def confirm(request: PermissionRequest) -> bool:
        err_console.print(Panel(request.format_for_display(), title="Confirm", border_style="yellow"))
        return Confirm.ask("Run this tool?", console=err_console, default=False)

    permissions = PermissionManager(
        auto_approve=assume_yes or settings.tools.auto_approve,
        confirmation_callback=confirm,
    )
    return ToolExecutor(
        registry=registry,
        permissions=permissions,
        max_output_length=settings.tools.max_output_length,
    )


def _coerce_value(raw: str, param_type: str) -> Any:
    if param_type == "integer":
        return int(raw)
    if param_type == "number":
        return float(raw)
    if param_type == "boolean":
        if raw.lower() in ("true", "yes", "1"):
            return True
        if raw.lower() in ("false", "no", "0"):
            return False
        raise ValueError(f"not a boolean: {raw}")
    if param_type in ("array", "object"):
        return json.loads(raw)
    return raw


def parse_tool_arguments(definition: ToolDefinition, pairs: list[str]) -> dict[str, Any]:
    """Turn ``name=value`` pairs into arguments typed per the tool definition.

    Raises:
        typer.BadParameter: If a pair is malformed or a value has the wrong type.
    """
    arguments: dict[str, Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got '{pair}'")

        param = definition.get_parameter(name)
        if param is None:
            # Left for the executor to reject with a proper message
            arguments[name] = raw
            continue

        try:
            arguments[name] = _coerce_value(raw, param.type)
        except ValueError as e:
            raise typer.BadParameter(f"{name}: expected {param.type} ({e})")

    return arguments


@app.command()
def tools(
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Print JSON schemas in a provider format ({', '.join(TOOL_FORMATS)})",
    ),
) -> None:
    """List available tools."""
    session = GitSession(get_settings())
    registry = ToolRegistry()
    register_builtin_tools(registry, session)

    if format:
        if format not in TOOL_FORMATS:
            raise typer.BadParameter(f"Unknown format '{format}'", param_hint="--format")
        schemas = [d.to_format(format) for d in registry.get_definitions()]
        console.print_json(json.dumps(schemas))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category", style="green")
    table.add_column("Permission", style="yellow")
    table.add_column("Parameters")
    table.add_column("Description")

    for tool in registry.get_all_tools():
        params = ", ".join(
            p.name if p.required else f"[{p.name}]" for p in tool.definition.parameters
        )
        table.add_row(
            tool.name,
            tool.category,
            tool.permission_level.value,
            escape(params) or "-",
            tool.definition.description,
        )

    console.print(table)


@app.command()
def call(
    tool_name: str = typer.Argument(..., help="Tool to invoke, e.g. list_commits"),
    arguments: Optional[list[str]] = typer.Argument(None, help="Arguments as NAME=VALUE"),
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-r",
        help="Repository to select before calling the tool",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Approve tools that change the repository without asking",
    ),
) -> None:
    """Invoke a tool by name and print its result."""
    session = GitSession(get_settings())
    executor = _build_executor(session, assume_yes=yes)

    tool = executor.registry.get(tool_name)
    parsed = parse_tool_arguments(tool.definition, arguments or []) if tool else {}

    try:
        if repo is not None:
            selected = executor.call("set_repository", {"path": str(repo)})
            if not selected.success:
                err_console.print(selected.content, style="red", markup=False, highlight=False)
                raise typer.Exit(1)

        result = executor.call(tool_name, parsed)
    finally:
        session.close()

    if not result.success:
        err_console.print(result.content, style="red", markup=False, highlight=False)
        raise typer.Exit(1)

    typer.echo(result.content)


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print(Panel("[bold]Current Configuration[/bold]", border_style="blue"))

    console.print("\n[bold]Credentials:[/bold]")
    console.print(f"  Username: {settings.git_username or '(default: git)'}")
    console.print(f"  Token:    {'✓ Set' if settings.has_git_token() else '✗ Not set'}")

    console.print("\n[bold]Git:[/bold]")
    console.print(f"  Remote: {settings.git.remote}")
    console.print(f"  Default identity: {settings.git.default_author} <{settings.git.default_email}>")
    console.print(f"  Network timeout: {settings.git.network_timeout}s")

    console.print("\n[bold]Versioning:[/bold]")
    console.print(f"  File: {settings.versioning.file_name}")
    console.print(f"  Strict: {settings.versioning.strict}")

    console.print("\n[bold]Tools:[/bold]")
    console.print(f"  Echo prefix: {settings.tools.echo_prefix!r}")
    console.print(f"  Auto-approve: {settings.tools.auto_approve}")

    console.print(f"\n[dim]User config: {CONFIG_FILE}[/dim]")


@app.command()
def init() -> None:
    """Write a default configuration file if none exists."""
    path = create_default_config()
    console.print(f"[green]Configuration at {path}[/green]")


if __name__ == "__main__":
    app()
