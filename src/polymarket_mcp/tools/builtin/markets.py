"""
Market and event listing tools (Gamma API).
"""

from typing import Any

from polymarket_mcp.client import Event, Market, parse_list
from polymarket_mcp.client.models import label_of
from polymarket_mcp.tools.base import clamp_limit, clamp_offset
from polymarket_mcp.tools.builtin.common import (
    PolymarketTool,
    limit_parameter,
    offset_parameter,
    supplied,
)
from polymarket_mcp.tools.formatting import (
    format_date,
    format_number,
    format_usd_or_na,
    pagination_footer,
)
from polymarket_mcp.tools.models import ToolParameter

# Member markets listed per event before summarizing the rest
EVENT_MARKET_PREVIEW = 5


def _listing_parameters(noun: str) -> list[ToolParameter]:
    """Filters shared by the market and event listings."""
    return [
        limit_parameter(noun, 20, 100),
        offset_parameter(noun),
        ToolParameter(
            name="active",
            type="boolean",
            description=f"Filter by active status - true for active {noun} only",
        ),
        ToolParameter(
            name="closed",
            type="boolean",
            description=f"Filter by closed status - false to exclude closed {noun}",
        ),
        ToolParameter(
            name="archived",
            type="boolean",
            description=f"Filter by archived status - false to exclude archived {noun}",
        ),
        ToolParameter(
            name="order",
            type="string",
            description="Field to sort by (volume, liquidity, start_date, end_date)",
            enum=["volume", "liquidity", "start_date", "end_date"],
        ),
        ToolParameter(
            name="ascending",
            type="boolean",
            description="Sort direction - true for ascending, false for descending (default: false)",
            default=False,
        ),
        ToolParameter(
            name="search",
            type="string",
            description=f"Search term to filter {noun} by title or description",
        ),
        ToolParameter(
            name="tag_id",
            type="number",
            description=f"Filter {noun} by specific tag/category ID",
        ),
        ToolParameter(
            name="liquidity_min",
            type="number",
            description="Minimum liquidity threshold in USDC",
        ),
        ToolParameter(
            name="volume_min",
            type="number",
            description="Minimum volume threshold in USDC",
        ),
    ]


def _listing_query(params: dict[str, Any], limit: int, offset: int) -> dict[str, Any]:
    query: dict[str, Any] = {"limit": limit, "offset": offset}
    query.update(supplied(params, "active", "closed", "archived"))
    if params.get("order"):
        query["order"] = params["order"]
        query["ascending"] = params.get("ascending", False)
    query.update(supplied(params, "search", "tag_id"))
    return query


def _listing_summary(count: int, noun: str, params: dict[str, Any]) -> str:
    summary = f"Found {count} {noun}"
    if params.get("search"):
        summary += f' matching "{params["search"]}"'
    if params.get("active"):
        summary += " (active only)"
    if params.get("closed") is False:
        summary += " (excluding closed)"
    return summary + "."


def _status(item: Market | Event) -> str:
    status = "🟢 Active" if item.active else "🔴 Inactive"
    if item.closed:
        status += " (Closed)"
    if item.archived:
        status += " (Archived)"
    return status


class GetMarketsTool(PolymarketTool):
    """List prediction markets with filtering and pagination."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_markets"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve Polymarket prediction markets with filtering and pagination options. "
            "Get market data including prices, volume, liquidity, and metadata."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return _listing_parameters("markets")

    @property
    def action(self) -> str:
        return "fetch markets"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch markets and render them as a report."""
        limit = clamp_limit(params.get("limit"), 20, 100)
        offset = clamp_offset(params.get("offset"))

        query = _listing_query(params, limit, offset)
        if params.get("liquidity_min"):
            query["liquidity_num_min"] = params["liquidity_min"]
        if params.get("volume_min"):
            query["volume_num_min"] = params["volume_min"]

        markets = parse_list(Market, await self.client.get_markets(query))

        text = f"# Polymarket Markets\n\n{_listing_summary(len(markets), 'markets', params)}\n\n"
        if not markets:
            return text + "No markets found matching the specified criteria."

        for index, market in enumerate(markets, start=1):
            text += f"## {index}. {market.question or 'N/A'}\n\n"
            text += f"- **Market ID**: {market.id or 'N/A'}\n"
            text += f"- **Slug**: {market.slug or 'N/A'}\n"
            text += f"- **Status**: {_status(market)}\n"
            text += f"- **Volume**: {format_usd_or_na(market.volume)}\n"
            text += f"- **Liquidity**: {format_usd_or_na(market.liquidity)}\n"
            if market.start_date:
                text += f"- **Start Date**: {format_date(market.start_date)}\n"
            if market.end_date:
                text += f"- **End Date**: {format_date(market.end_date)}\n"
            if market.description:
                text += f"- **Description**: {market.description}\n"
            if market.outcomes:
                text += f"- **Outcomes**: {', '.join(label_of(o) for o in market.outcomes)}\n"
            if market.tags:
                text += f"- **Tags**: {', '.join(label_of(t) for t in market.tags)}\n"
            if market.enable_order_book:
                text += "- **Trading**: Available via CLOB\n"
            text += "\n---\n\n"

        return text + pagination_footer(len(markets), limit, offset)


class GetEventsTool(PolymarketTool):
    """List events, each grouping related markets."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_events"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve Polymarket events which contain multiple related markets. "
            "Events group markets around a common theme or topic."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return _listing_parameters("events")

    @property
    def action(self) -> str:
        return "fetch events"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch events and render them with a preview of their markets."""
        limit = clamp_limit(params.get("limit"), 20, 100)
        offset = clamp_offset(params.get("offset"))

        query = _listing_query(params, limit, offset)
        query.update(supplied(params, "liquidity_min", "volume_min"))

        events = parse_list(Event, await self.client.get_events(query))

        text = f"# Polymarket Events\n\n{_listing_summary(len(events), 'events', params)}\n\n"
        if not events:
            return text + "No events found matching the specified criteria."

        for index, event in enumerate(events, start=1):
            text += f"## {index}. {event.title or 'N/A'}\n\n"
            text += f"- **Event ID**: {event.id or 'N/A'}\n"
            text += f"- **Slug**: {event.slug or 'N/A'}\n"
            text += f"- **Status**: {_status(event)}\n"
            text += f"- **Total Volume**: {format_usd_or_na(event.volume)}\n"
            text += f"- **Total Liquidity**: {format_usd_or_na(event.liquidity)}\n"
            text += f"- **Markets Count**: {len(event.markets)}\n"
            if event.start_date:
                text += f"- **Start Date**: {format_date(event.start_date)}\n"
            if event.end_date:
                text += f"- **End Date**: {format_date(event.end_date)}\n"
            if event.description:
                text += f"- **Description**: {event.description}\n"
            if event.tags:
                text += f"- **Tags**: {', '.join(label_of(t) for t in event.tags)}\n"

            if event.markets:
                text += "\n### Markets in this Event:\n"
                for number, market in enumerate(event.markets[:EVENT_MARKET_PREVIEW], start=1):
                    text += f"{number}. **{market.question or market.title or 'N/A'}**\n"
                    if market.volume:
                        text += f"   - Volume: ${format_number(market.volume)}\n"
                    if market.outcomes:
                        text += f"   - Outcomes: {', '.join(label_of(o) for o in market.outcomes)}\n"
                remaining = len(event.markets) - EVENT_MARKET_PREVIEW
                if remaining > 0:
                    text += f"   ... and {remaining} more markets\n"
            text += "\n---\n\n"

        return text + pagination_footer(len(events), limit, offset)
