"""
Main Typer application for the polymarket-mcp CLI.

Running the program without a command serves MCP over stdio, which is how
MCP hosts launch it.
"""

from typing import Annotated

import typer

from polymarket_mcp import __version__
from polymarket_mcp.cli.commands import serve, tools
from polymarket_mcp.cli.output import print_info

app = typer.Typer(
    name="polymarket-mcp",
    help="MCP server exposing read-only Polymarket market data tools.",
    no_args_is_help=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"polymarket-mcp version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold blue]polymarket-mcp[/bold blue] - Polymarket tools over MCP

    Run [bold]polymarket-mcp[/bold] without arguments to serve over stdio.
    Use [bold]polymarket-mcp tools list[/bold] to see the available tools.
    """
    if ctx.invoked_subcommand is None:
        serve.run_server()


app.command("serve")(serve.serve_command)
app.add_typer(tools.app, name="tools")


if __name__ == "__main__":
    app()
