"""
Market price history tool (CLOB API).

The report optionally includes the current order book. That second request is
supplementary: if it fails, the failure is logged and the price report is
still returned.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from polymarket_mcp.client import (
    OrderBook,
    PolymarketAPIError,
    PricePoint,
    parse_order_book,
    parse_price_history,
)
from polymarket_mcp.tools.base import clamp_limit
from polymarket_mcp.tools.builtin.common import (
    PolymarketTool,
    require_market_or_token,
    supplied,
)
from polymarket_mcp.tools.builtin.order_book import compute_spread, render_spread
from polymarket_mcp.tools.formatting import (
    format_date,
    format_datetime,
    format_number,
    format_usd,
    pnl_icon,
)
from polymarket_mcp.tools.models import ToolParameter

logger = logging.getLogger(__name__)

RECENT_POINTS = 10
TOP_LEVELS = 5


class GetMarketPricesTool(PolymarketTool):
    """Show price history and, optionally, the current top of book."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_market_prices"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Get current market prices and trading data for specific markets or tokens. "
            "Shows bid/ask spreads, last traded prices, and market depth."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            ToolParameter(
                name="market_id",
                type="string",
                description="Specific market ID to get prices for",
            ),
            ToolParameter(
                name="token_id",
                type="string",
                description="Specific token/asset ID to get prices for",
            ),
            ToolParameter(
                name="interval",
                type="string",
                description="Price interval for historical data (1m, 5m, 1h, 1d)",
                enum=["1m", "5m", "1h", "1d"],
                default="1h",
            ),
            ToolParameter(
                name="fidelity",
                type="number",
                description="Number of price points to return (default: 100, max: 1000)",
                default=100,
            ),
            ToolParameter(
                name="start_ts",
                type="number",
                description="Start timestamp for historical prices (Unix timestamp)",
            ),
            ToolParameter(
                name="end_ts",
                type="number",
                description="End timestamp for historical prices (Unix timestamp)",
            ),
            ToolParameter(
                name="include_orderbook",
                type="boolean",
                description="Include current order book data (default: true)",
                default=True,
            ),
        ]

    @property
    def action(self) -> str:
        return "fetch market prices"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch price history (and the order book) and render a report."""
        require_market_or_token(params)
        fidelity = clamp_limit(params.get("fidelity"), 100, 1000)
        interval = params.get("interval") or "1h"

        # A market id takes precedence over a token id
        if params.get("market_id"):
            subject = ("market", params["market_id"])
            heading = f"## Market: {params['market_id']}\n\n"
        else:
            subject = ("token_id", params["token_id"])
            heading = f"## Token: {params['token_id']}\n\n"

        query: dict[str, Any] = {subject[0]: subject[1], "interval": interval, "fidelity": fidelity}
        query.update(supplied(params, "start_ts", "end_ts"))

        history = parse_price_history(await self.client.get_market_prices(query))

        book = None
        if params.get("include_orderbook", True):
            book = await self._fetch_order_book({subject[0]: subject[1]})

        text = "# Market Prices\n\n" + heading
        if book is not None:
            text += _market_status(book)

        if history:
            text += _price_history(history, interval)
        else:
            text += "No price history available for the specified parameters.\n\n"

        text += "---\n\n"
        text += f"*Data interval: {interval} | Fidelity: {fidelity} points*\n"
        start_ts, end_ts = params.get("start_ts"), params.get("end_ts")
        if start_ts or end_ts:
            start = format_date(start_ts) if start_ts else "earliest"
            end = format_date(end_ts) if end_ts else "latest"
            text += f"*Time range: {start} to {end}*\n"
        return text

    async def _fetch_order_book(self, query: dict[str, Any]) -> Optional[OrderBook]:
        try:
            return parse_order_book(await self.client.get_order_book(query))
        except (PolymarketAPIError, ValidationError) as e:
            logger.warning(f"Failed to fetch order book: {e}")
            return None


def _market_status(book: OrderBook) -> str:
    text = "### Current Market Status\n\n"

    spread = compute_spread(book.bids, book.asks)
    if spread:
        text += render_spread(spread)

    if book.bids:
        text += f"\n#### Top {TOP_LEVELS} Bids\n"
        for number, level in enumerate(book.bids[:TOP_LEVELS], start=1):
            text += f"{number}. {format_usd(level.price, 4)} × {format_number(level.size)} shares\n"

    if book.asks:
        text += f"\n#### Top {TOP_LEVELS} Asks\n"
        for number, level in enumerate(book.asks[:TOP_LEVELS], start=1):
            text += f"{number}. {format_usd(level.price, 4)} × {format_number(level.size)} shares\n"

    return text + "\n"


def _price_history(history: list[PricePoint], interval: str) -> str:
    text = f"### Price History ({interval} intervals)\n\n"

    prices = [point.price for point in history if point.price > 0]
    if prices:
        current, first = prices[-1], prices[0]
        change = current - first
        change_percent = change / first * 100
        text += f"- **Current Price**: {format_usd(current, 4)}\n"
        text += (
            f"- **Price Change**: {pnl_icon(change)} {format_usd(change, 4)} "
            f"({change_percent:.2f}%)\n"
        )
        text += f"- **Period High**: {format_usd(max(prices), 4)}\n"
        text += f"- **Period Low**: {format_usd(min(prices), 4)}\n"
        text += f"- **Data Points**: {len(history)}\n\n"

    text += "#### Recent Price Points\n\n"
    for point in reversed(history[-RECENT_POINTS:]):
        text += f"**{format_datetime(point.timestamp)}**\n"
        text += f"- Price: {format_usd(point.price, 4)}\n"
        if point.volume > 0:
            text += f"- Volume: {format_number(point.volume)} shares\n"
        text += "\n"

    volumes = [point.volume for point in history if point.volume > 0]
    if volumes:
        total = sum(volumes)
        text += "#### Volume Statistics\n\n"
        text += f"- **Total Volume**: {format_number(total)} shares\n"
        text += f"- **Average Volume**: {format_number(total / len(volumes))} shares\n"
        text += f"- **Peak Volume**: {format_number(max(volumes))} shares\n\n"

    return text
