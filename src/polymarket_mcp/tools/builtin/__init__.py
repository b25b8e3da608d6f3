"""Built-in Polymarket tools.

Read-only tools over the Polymarket APIs:
- Markets and events (Gamma API)
- User positions, activity, trades and market holders (Data API)
- Order books and price history (CLOB API)
"""

from polymarket_mcp.tools.builtin.common import PolymarketTool
from polymarket_mcp.tools.builtin.holders import GetMarketHoldersTool
from polymarket_mcp.tools.builtin.markets import GetEventsTool, GetMarketsTool
from polymarket_mcp.tools.builtin.order_book import GetOrderBookTool
from polymarket_mcp.tools.builtin.prices import GetMarketPricesTool
from polymarket_mcp.tools.builtin.registry_utils import BUILTIN_TOOLS, create_builtin_registry
from polymarket_mcp.tools.builtin.trades import GetTradesTool
from polymarket_mcp.tools.builtin.users import GetUserActivityTool, GetUserPositionsTool

__all__ = [
    "PolymarketTool",
    "GetMarketsTool",
    "GetEventsTool",
    "GetUserPositionsTool",
    "GetUserActivityTool",
    "GetMarketPricesTool",
    "GetTradesTool",
    "GetOrderBookTool",
    "GetMarketHoldersTool",
    "BUILTIN_TOOLS",
    "create_builtin_registry",
]
