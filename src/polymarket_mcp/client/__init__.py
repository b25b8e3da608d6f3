"""Upstream Polymarket API access.

Provides the HTTP client facade over the Gamma, Data and CLOB APIs and the
models that normalize their payloads.
"""

from polymarket_mcp.client.exceptions import FailureType, PolymarketAPIError
from polymarket_mcp.client.models import (
    Activity,
    Event,
    EventMarket,
    Holder,
    HoldersPage,
    Market,
    MarketRef,
    OrderBook,
    OrderLevel,
    Position,
    PricePoint,
    Trade,
    parse_holders,
    parse_list,
    parse_order_book,
    parse_price_history,
)
from polymarket_mcp.client.polymarket import PolymarketClient, ServiceName

__all__ = [
    "PolymarketClient",
    "ServiceName",
    "PolymarketAPIError",
    "FailureType",
    "Activity",
    "Event",
    "EventMarket",
    "Holder",
    "HoldersPage",
    "Market",
    "MarketRef",
    "OrderBook",
    "OrderLevel",
    "Position",
    "PricePoint",
    "Trade",
    "parse_holders",
    "parse_list",
    "parse_order_book",
    "parse_price_history",
]
