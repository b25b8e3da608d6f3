"""
polymarket-mcp tools - Inspect and call tools from the command line.

Usage:
    polymarket-mcp tools list
    polymarket-mcp tools info <tool-name>
    polymarket-mcp tools call <tool-name> [--arg key=value ...] [--json '{...}']
"""

import asyncio
import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from polymarket_mcp.client import PolymarketClient
from polymarket_mcp.config import ConfigurationError, get_config
from polymarket_mcp.dispatcher import ToolDispatcher, UnknownToolError
from polymarket_mcp.tools import ToolRegistry, ToolResult
from polymarket_mcp.tools.builtin import create_builtin_registry

app = typer.Typer(
    name="tools",
    help="Inspect and call the Polymarket tools.",
)

console = Console()


@contextmanager
def _registry() -> Iterator[ToolRegistry]:
    """Registry backed by a client that is closed afterwards."""
    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    client = PolymarketClient(config.api)
    try:
        yield create_builtin_registry(client)
    finally:
        asyncio.run(client.aclose())


def parse_arguments(pairs: list[str], raw_json: str | None) -> dict[str, Any]:
    """Build an argument mapping from key=value pairs and a JSON object.

    Values in key=value pairs are decoded as JSON when possible, so numbers
    and booleans keep their type; anything else stays a string. Pairs win
    over keys in the JSON object.

    Raises:
        ValueError: On a malformed pair or JSON that is not an object
    """
    arguments: dict[str, Any] = {}
    if raw_json:
        decoded = json.loads(raw_json)
        if not isinstance(decoded, dict):
            raise ValueError("--json must be a JSON object")
        arguments.update(decoded)

    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {pair}")
        try:
            arguments[key.strip()] = json.loads(value)
        except json.JSONDecodeError:
            arguments[key.strip()] = value
    return arguments


@app.command("list")
def list_tools() -> None:
    """List all available tools."""
    with _registry() as registry:
        table = Table(title="Available Tools")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Description")

        for tool in registry:
            desc = tool.description[:80] + "..." if len(tool.description) > 80 else tool.description
            table.add_row(tool.name, desc)

        console.print(table)
        console.print(f"\n[dim]Total: {len(registry)} tool(s)[/dim]")


@app.command("info")
def tool_info(
    tool_name: Annotated[
        str,
        typer.Argument(help="Tool name to get info about"),
    ],
) -> None:
    """Show detailed information about a tool."""
    with _registry() as registry:
        tool = registry.get(tool_name)

        if not tool:
            console.print(f"[red]Error:[/red] Tool not found: {tool_name}")
            console.print(f"\n[dim]Available tools: {', '.join(registry.list_tool_names())}[/dim]")
            raise typer.Exit(1)

        console.print(f"\n[bold cyan]{tool.name}[/bold cyan]")
        console.print(f"\n[bold]Description:[/bold]\n{tool.description}")

        if tool.parameters:
            console.print("\n[bold]Parameters:[/bold]")
            for param in tool.parameters:
                required = "[red]*[/red]" if param.required else ""
                default = f" (default: {param.default})" if param.default is not None else ""
                choices = f" [{', '.join(param.enum)}]" if param.enum else ""
                console.print(f"  • {param.name}{required}: {param.type}{default}", end="")
                console.print(choices, markup=False)
                console.print(f"    {param.description}")

        console.print("\n[bold]Input Schema:[/bold]")
        console.print_json(json.dumps(tool.get_input_schema()))


@app.command("call")
def call_tool(
    tool_name: Annotated[
        str,
        typer.Argument(help="Tool name to call"),
    ],
    args: Annotated[
        list[str] | None,
        typer.Option(
            "--arg",
            "-a",
            help="Tool argument as key=value (repeatable).",
        ),
    ] = None,
    raw_json: Annotated[
        str | None,
        typer.Option(
            "--json",
            "-j",
            help="Tool arguments as a JSON object.",
        ),
    ] = None,
) -> None:
    """Call a tool once and print its report."""
    try:
        arguments = parse_arguments(args or [], raw_json)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid arguments: {e}")
        raise typer.Exit(1)

    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    async def run_tool() -> ToolResult:
        async with PolymarketClient(config.api) as client:
            dispatcher = ToolDispatcher(create_builtin_registry(client))
            return await dispatcher.call_tool(tool_name, arguments)

    try:
        result = asyncio.run(run_tool())
    except UnknownToolError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("\n[dim]Run 'polymarket-mcp tools list' to see available tools[/dim]")
        raise typer.Exit(1)

    typer.echo(result.output)
    if result.is_error:
        raise typer.Exit(1)
