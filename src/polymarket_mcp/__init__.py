"""
polymarket-mcp - Polymarket data tools over the Model Context Protocol

Exposes Polymarket markets, events, positions, activity, trades, order books,
holders and price history as MCP tools served over stdio.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("polymarket-mcp")
except PackageNotFoundError:
    __version__ = "1.0.0"

__all__ = [
    "__version__",
]
