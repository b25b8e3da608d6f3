"""
Order book tool (CLOB API) with spread and liquidity analysis.

Tier thresholds:
- spread quality, by spread as a percentage of the best bid:
  < 0.5 Excellent, < 1 Good, < 2 Fair, otherwise Poor
- liquidity balance, by bid/ask size ratio:
  0.8-1.2 (exclusive) well balanced, 0.6-1.4 (exclusive) moderately
  balanced, otherwise bid or ask heavy
"""

import math
from datetime import datetime, timezone
from typing import Any, NamedTuple, Optional

from polymarket_mcp.client import OrderBook, OrderLevel, parse_order_book
from polymarket_mcp.tools.base import clamp_depth
from polymarket_mcp.tools.builtin.common import (
    PolymarketTool,
    market_or_token_parameters,
    require_market_or_token,
    supplied,
)
from polymarket_mcp.tools.formatting import format_number, format_usd
from polymarket_mcp.tools.models import ToolParameter

# Levels per side included in the cumulative depth section
CUMULATIVE_LEVELS = 5


class Spread(NamedTuple):
    """Top-of-book prices and the derived spread."""

    best_bid: float
    best_ask: float
    spread: float
    percent: float
    mid: float


def compute_spread(bids: list[OrderLevel], asks: list[OrderLevel]) -> Optional[Spread]:
    """Spread between the best levels, or None when either side is empty."""
    if not bids or not asks:
        return None
    best_bid = bids[0].price
    best_ask = asks[0].price
    spread = best_ask - best_bid
    percent = spread / best_bid * 100 if best_bid else math.inf
    return Spread(best_bid, best_ask, spread, percent, (best_bid + best_ask) / 2)


def spread_quality(percent: float) -> str:
    if percent < 0.5:
        return "🟢 Excellent (Very tight spread)"
    if percent < 1.0:
        return "🟡 Good (Reasonable spread)"
    if percent < 2.0:
        return "🟠 Fair (Wide spread)"
    return "🔴 Poor (Very wide spread)"


def liquidity_balance(ratio: float) -> str:
    if 0.8 < ratio < 1.2:
        return "🟢 Well balanced"
    if 0.6 < ratio < 1.4:
        return "🟡 Moderately balanced"
    return "🟠 Bid heavy" if ratio > 1 else "🟠 Ask heavy"


def render_spread(spread: Spread) -> str:
    """Best bid/ask, spread and mid price lines."""
    text = f"- **Best Bid**: {format_usd(spread.best_bid, 4)}\n"
    text += f"- **Best Ask**: {format_usd(spread.best_ask, 4)}\n"
    text += f"- **Spread**: {format_usd(spread.spread, 4)} ({spread.percent:.2f}%)\n"
    text += f"- **Mid Price**: {format_usd(spread.mid, 4)}\n"
    return text


def _share(part: float, total: float) -> float:
    return part / total * 100 if total else 0.0


def _liquidity_analysis(bids: list[OrderLevel], asks: list[OrderLevel]) -> str:
    bid_size = sum(level.size for level in bids)
    ask_size = sum(level.size for level in asks)
    total_size = bid_size + ask_size
    total_value = sum(level.value for level in bids) + sum(level.value for level in asks)
    if ask_size:
        ratio = bid_size / ask_size
    else:
        ratio = math.inf if bid_size else math.nan

    text = "## Liquidity Analysis\n\n"
    text += f"- **Total Liquidity**: {format_number(total_size)} shares\n"
    text += (
        f"- **Bid Liquidity**: {format_number(bid_size)} shares "
        f"({_share(bid_size, total_size):.1f}%)\n"
    )
    text += (
        f"- **Ask Liquidity**: {format_number(ask_size)} shares "
        f"({_share(ask_size, total_size):.1f}%)\n"
    )
    text += f"- **Total Value**: {format_usd(total_value)}\n"
    text += f"- **Liquidity Balance**: {liquidity_balance(ratio)}\n\n"
    return text


def _level_table(levels: list[OrderLevel]) -> str:
    text = "| Price | Size | Total Value |\n"
    text += "|-------|------|-------------|\n"
    for level in levels:
        text += (
            f"| {format_usd(level.price, 4)} | {format_number(level.size)} "
            f"| {format_usd(level.value)} |\n"
        )
    return text + "\n"


def _cumulative_depth(levels: list[OrderLevel], label: str, bound: str) -> str:
    text = f"### {label} Depth\n\n"
    size = value = 0.0
    for number, level in enumerate(levels[:CUMULATIVE_LEVELS], start=1):
        size += level.size
        value += level.value
        text += (
            f"**Level {number}**: {bound} {format_usd(level.price, 4)} → "
            f"{format_number(size)} shares ({format_usd(value)})\n"
        )
    return text + "\n"


class GetOrderBookTool(PolymarketTool):
    """Show bids and asks for a market or token."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_order_book"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve current order book data showing bids and asks for a specific "
            "market or token. Shows market depth and liquidity."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            *market_or_token_parameters("order book"),
            ToolParameter(
                name="depth",
                type="number",
                description="Number of price levels to show for bids and asks (default: 10, max: 50)",
                default=10,
            ),
            ToolParameter(
                name="include_spread_analysis",
                type="boolean",
                description="Include bid-ask spread analysis (default: true)",
                default=True,
            ),
            ToolParameter(
                name="include_liquidity_analysis",
                type="boolean",
                description="Include liquidity depth analysis (default: true)",
                default=True,
            ),
        ]

    @property
    def action(self) -> str:
        return "fetch order book"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch the book and render analysis, level tables and depth."""
        require_market_or_token(params)
        depth = clamp_depth(params.get("depth"))

        query: dict[str, Any] = {}
        if params.get("market_id"):
            query["market"] = params["market_id"]
        query.update(supplied(params, "token_id"))

        book = parse_order_book(await self.client.get_order_book(query))
        return self.render(book, params, depth)

    def render(self, book: OrderBook, params: dict[str, Any], depth: int) -> str:
        bids = book.bids[:depth]
        asks = book.asks[:depth]
        include_liquidity = params.get("include_liquidity_analysis", True)

        text = "# Order Book\n\n"
        if params.get("market_id"):
            text += f"**Market ID**: {params['market_id']}\n\n"
        if params.get("token_id"):
            text += f"**Token ID**: {params['token_id']}\n\n"

        spread = compute_spread(bids, asks)
        if params.get("include_spread_analysis", True) and spread:
            text += "## Market Status\n\n"
            text += render_spread(spread)
            text += f"- **Spread Quality**: {spread_quality(spread.percent)}\n\n"

        if include_liquidity:
            text += _liquidity_analysis(bids, asks)

        text += f"## Order Book (Top {depth} levels)\n\n"

        # Asks are listed highest price first so the spread sits mid-table
        if asks:
            text += "### 🔴 Asks (Sell Orders)\n\n" + _level_table(list(reversed(asks)))
        else:
            text += "### 🔴 Asks (Sell Orders)\n\nNo ask orders available.\n\n"

        if spread:
            text += f"**--- SPREAD: {format_usd(spread.spread, 4)} ---**\n\n"

        if bids:
            text += "### 🟢 Bids (Buy Orders)\n\n" + _level_table(bids)
        else:
            text += "### 🟢 Bids (Buy Orders)\n\nNo bid orders available.\n\n"

        if include_liquidity and (bids or asks):
            text += "## Cumulative Depth\n\n"
            if bids:
                text += _cumulative_depth(bids, "Bid", "Up to")
            if asks:
                text += _cumulative_depth(asks, "Ask", "From")

        as_of = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        text += "---\n\n"
        text += f"*Order book data as of {as_of}*\n"
        text += f"*Showing top {depth} price levels*\n"
        return text
