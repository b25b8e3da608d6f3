"""
Output helpers for the CLI.

Informational messages go to stdout. Errors go to stderr, since under `serve`
stdout carries the MCP protocol stream.
"""

from rich.console import Console

console = Console()
error_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
