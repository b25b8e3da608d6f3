"""
Trade history tool (Data API).
"""

from typing import Any

from polymarket_mcp.client import Trade, parse_list
from polymarket_mcp.tools.base import clamp_limit, clamp_offset
from polymarket_mcp.tools.builtin.common import (
    PolymarketTool,
    limit_parameter,
    offset_parameter,
    order_direction_parameter,
    supplied,
)
from polymarket_mcp.tools.formatting import (
    format_datetime,
    format_number,
    format_usd,
    pagination_footer,
    short_address,
    short_hash,
)
from polymarket_mcp.tools.models import ToolParameter

_FILTERS = (
    "market_id",
    "asset_id",
    "user_address",
    "side",
    "min_size",
    "max_size",
    "min_price",
    "max_price",
    "start_date",
    "end_date",
)


class GetTradesTool(PolymarketTool):
    """List executed trades with aggregate trading statistics."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_trades"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve recent trades and trading history from Polymarket. "
            "Shows executed trades with prices, volumes, and market information."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            limit_parameter("trades", 50, 100),
            offset_parameter("trades"),
            ToolParameter(
                name="market_id", type="string", description="Filter trades by specific market ID"
            ),
            ToolParameter(
                name="asset_id",
                type="string",
                description="Filter trades by specific asset/token ID",
            ),
            ToolParameter(
                name="user_address",
                type="string",
                description="Filter trades by specific user address",
            ),
            ToolParameter(
                name="side",
                type="string",
                description="Filter trades by side (BUY or SELL)",
                enum=["BUY", "SELL"],
            ),
            ToolParameter(name="min_size", type="number", description="Minimum trade size threshold"),
            ToolParameter(name="max_size", type="number", description="Maximum trade size threshold"),
            ToolParameter(name="min_price", type="number", description="Minimum price threshold"),
            ToolParameter(name="max_price", type="number", description="Maximum price threshold"),
            ToolParameter(
                name="start_date",
                type="string",
                description="Start date filter (ISO 8601 format: YYYY-MM-DD)",
            ),
            ToolParameter(
                name="end_date",
                type="string",
                description="End date filter (ISO 8601 format: YYYY-MM-DD)",
            ),
            ToolParameter(
                name="order_by",
                type="string",
                description="Field to sort by (timestamp, size, price)",
                enum=["timestamp", "size", "price"],
                default="timestamp",
            ),
            order_direction_parameter(),
        ]

    @property
    def action(self) -> str:
        return "fetch trades"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch trades and render statistics plus per-trade details."""
        limit = clamp_limit(params.get("limit"), 50, 100)
        offset = clamp_offset(params.get("offset"))
        user = params.get("user_address")

        query: dict[str, Any] = {
            "limit": limit,
            "offset": offset,
            "order_by": params.get("order_by") or "timestamp",
            "order_direction": params.get("order_direction") or "DESC",
        }
        query.update(supplied(params, *_FILTERS))

        trades = parse_list(Trade, await self.client.get_trades(query))

        text = f"# Trading History\n\nFound {len(trades)} trades{_filter_description(params)}.\n\n"

        if trades:
            text += _statistics(trades, per_user=not user)

        if not trades:
            return text + "No trades found matching the specified criteria."

        text += "## Trade Details\n\n"
        for index, trade in enumerate(trades, start=1):
            side_icon = "🟢 📈" if trade.side == "BUY" else "🔴 📉"
            text += f"### {index}. {side_icon} {trade.side or 'UNKNOWN'} Trade\n\n"
            text += f"- **Time**: {format_datetime(trade.timestamp)}\n"
            text += f"- **Market**: {trade.market_question}\n"
            text += f"- **Outcome**: {trade.outcome or 'Unknown'}\n"
            text += f"- **Size**: {format_number(trade.size, 4)} shares\n"
            text += f"- **Price**: {format_usd(trade.price, 4)}\n"
            text += f"- **Total Value**: {format_usd(trade.value)}\n"
            if not user:
                text += f"- **Trader**: {short_address(trade.user_address)}\n"
            if trade.maker_address and trade.taker_address:
                text += f"- **Maker**: {short_address(trade.maker_address)}\n"
                text += f"- **Taker**: {short_address(trade.taker_address)}\n"
            if trade.maker_fee > 0 or trade.taker_fee > 0:
                text += f"- **Fees**: {format_usd(trade.maker_fee + trade.taker_fee, 4)}\n"
                if trade.fee_rate_bps:
                    text += f"- **Fee Rate**: {trade.fee_rate_bps / 100:.2f}%\n"
            text += f"- **Transaction**: {short_hash(trade.tx_hash)}\n"
            if trade.block_number:
                text += f"- **Block**: {trade.block_number}\n"
            text += f"- **Market ID**: {trade.market_id or 'N/A'}\n"
            text += f"- **Asset ID**: {trade.asset_id or 'N/A'}\n"
            text += "\n---\n\n"

        return text + pagination_footer(len(trades), limit, offset)


def _filter_description(params: dict[str, Any]) -> str:
    description = ""
    if params.get("market_id"):
        description += f" for market {params['market_id']}"
    if params.get("user_address"):
        description += f" by user {short_address(params['user_address'])}"
    if params.get("side"):
        description += f" ({params['side']} only)"
    if params.get("start_date") or params.get("end_date"):
        description += (
            f" from {params.get('start_date') or 'earliest'} to {params.get('end_date') or 'latest'}"
        )
    return description


def _statistics(trades: list[Trade], per_user: bool) -> str:
    """Aggregate statistics; unique traders only when not filtered to one user."""
    count = len(trades)
    buys = sum(1 for t in trades if t.side == "BUY")
    sells = sum(1 for t in trades if t.side == "SELL")
    total_volume = sum(t.size for t in trades)
    total_value = sum(t.value for t in trades)
    avg_price = sum(t.price for t in trades) / count
    avg_size = total_volume / count

    text = "## Trading Statistics\n\n"
    text += f"- **Total Trades**: {count}\n"
    text += f"- **Buy Trades**: 🟢 {buys} ({buys / count * 100:.1f}%)\n"
    text += f"- **Sell Trades**: 🔴 {sells} ({sells / count * 100:.1f}%)\n"
    text += f"- **Total Volume**: {format_number(total_volume, 2)} shares\n"
    text += f"- **Total Value**: {format_usd(total_value)}\n"
    text += f"- **Average Price**: {format_usd(avg_price, 4)}\n"
    text += f"- **Average Size**: {format_number(avg_size, 2)} shares\n"
    text += f"- **Unique Markets**: {len({t.market_id for t in trades})}\n"
    if per_user:
        text += f"- **Unique Traders**: {len({t.user_address for t in trades})}\n"
    return text + "\n"
