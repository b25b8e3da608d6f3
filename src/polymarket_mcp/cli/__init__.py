"""Command-line interface for polymarket-mcp."""

from polymarket_mcp.cli.app import app

__all__ = ["app"]
