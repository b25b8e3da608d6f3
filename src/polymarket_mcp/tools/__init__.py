"""Tool system for the Polymarket MCP server.

Each tool declares a parameter schema, validates its arguments, calls the
upstream APIs and renders a text report. Tools never raise to their caller:
failures come back as error results.
"""

from polymarket_mcp.tools.base import (
    Tool,
    ToolExecutionError,
    clamp_depth,
    clamp_limit,
    clamp_offset,
)
from polymarket_mcp.tools.models import TextContent, ToolCall, ToolParameter, ToolResult
from polymarket_mcp.tools.registry import ToolRegistry

__all__ = [
    "Tool",
    "ToolExecutionError",
    "clamp_depth",
    "clamp_limit",
    "clamp_offset",
    "TextContent",
    "ToolCall",
    "ToolParameter",
    "ToolResult",
    "ToolRegistry",
]
