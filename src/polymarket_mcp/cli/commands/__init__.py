"""CLI command modules."""

from polymarket_mcp.cli.commands import serve, tools

__all__ = ["serve", "tools"]
