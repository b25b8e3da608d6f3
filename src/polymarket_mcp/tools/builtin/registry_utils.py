"""Utility functions for tool registry setup."""

import logging

from polymarket_mcp.client import PolymarketClient
from polymarket_mcp.tools.builtin.holders import GetMarketHoldersTool
from polymarket_mcp.tools.builtin.markets import GetEventsTool, GetMarketsTool
from polymarket_mcp.tools.builtin.order_book import GetOrderBookTool
from polymarket_mcp.tools.builtin.prices import GetMarketPricesTool
from polymarket_mcp.tools.builtin.trades import GetTradesTool
from polymarket_mcp.tools.builtin.users import GetUserActivityTool, GetUserPositionsTool
from polymarket_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

BUILTIN_TOOLS = (
    GetMarketsTool,
    GetEventsTool,
    GetUserPositionsTool,
    GetUserActivityTool,
    GetMarketPricesTool,
    GetTradesTool,
    GetOrderBookTool,
    GetMarketHoldersTool,
)


def create_builtin_registry(client: PolymarketClient) -> ToolRegistry:
    """Build the registry of all built-in tools.

    Args:
        client: Upstream client shared by every tool

    Returns:
        ToolRegistry listing the tools in their canonical order
    """
    registry = ToolRegistry(tool_class(client) for tool_class in BUILTIN_TOOLS)
    logger.debug(f"Registered built-in tools: {', '.join(registry.list_tool_names())}")
    return registry
