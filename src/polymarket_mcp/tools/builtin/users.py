"""
User positions and on-chain activity tools (Data API).
"""

from collections import Counter
from typing import Any

from polymarket_mcp.client import Activity, Position, parse_list
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
    pnl_icon,
    short_address,
    short_hash,
)
from polymarket_mcp.tools.models import ToolParameter

# Default dust threshold when zero positions are not requested
DEFAULT_MIN_POSITION_SIZE = 0.01

ACTIVITY_TYPES = ["TRADE", "SPLIT", "MERGE", "REDEEM", "REWARD", "CONVERSION"]

_ACTIVITY_ICONS = {
    "SPLIT": "✂️",
    "MERGE": "🔗",
    "REDEEM": "💰",
    "REWARD": "🎁",
    "CONVERSION": "🔄",
}

# Non-trade activity types with their summary labels
_ACTIVITY_LABELS = [
    ("SPLIT", "Splits"),
    ("MERGE", "Merges"),
    ("REDEEM", "Redeems"),
    ("REWARD", "Rewards"),
    ("CONVERSION", "Conversions"),
]


def _user_address_parameter() -> ToolParameter:
    return ToolParameter(
        name="user_address",
        type="string",
        description="User's wallet address (proxy wallet address)",
        required=True,
    )


class GetUserPositionsTool(PolymarketTool):
    """Show a user's holdings with P&L."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_user_positions"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve user's current positions in Polymarket prediction markets. "
            "Shows holdings, P&L, and position details."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            _user_address_parameter(),
            limit_parameter("positions", 50, 100),
            offset_parameter("positions"),
            ToolParameter(
                name="asset_type",
                type="string",
                description="Filter by asset type (conditional_token, collateral_token)",
                enum=["conditional_token", "collateral_token"],
            ),
            ToolParameter(
                name="market_id",
                type="string",
                description="Filter positions by specific market ID",
            ),
            ToolParameter(
                name="min_size",
                type="number",
                description="Minimum position size threshold",
            ),
            ToolParameter(
                name="show_zero_positions",
                type="boolean",
                description="Include positions with zero size (default: false)",
                default=False,
            ),
        ]

    @property
    def action(self) -> str:
        return "fetch user positions"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch a user's positions and render a portfolio report."""
        user = params["user_address"]
        limit = clamp_limit(params.get("limit"), 50, 100)
        offset = clamp_offset(params.get("offset"))
        show_zero = params.get("show_zero_positions", False)

        query: dict[str, Any] = {"limit": limit, "offset": offset}
        query.update(supplied(params, "asset_type", "market_id"))
        if params.get("min_size"):
            query["min_size"] = params["min_size"]
        elif not show_zero:
            query["min_size"] = DEFAULT_MIN_POSITION_SIZE

        positions = parse_list(Position, await self.client.get_user_positions(user, query))

        active = [p for p in positions if p.size > 0]
        total_value = sum(p.current_value for p in active)
        total_pnl = sum(p.pnl for p in active)
        total_realized = sum(p.realized_pnl for p in active)
        shown = positions if show_zero else active

        text = f"# User Positions\n\nFound {len(shown)} positions for user {short_address(user)}\n\n"

        if active:
            text += "## Portfolio Summary\n\n"
            text += f"- **Active Positions**: {len(active)}\n"
            text += f"- **Total Current Value**: {format_usd(total_value)}\n"
            text += f"- **Total Unrealized P&L**: {pnl_icon(total_pnl)} {format_usd(total_pnl)}\n"
            text += f"- **Total Realized P&L**: {pnl_icon(total_realized)} {format_usd(total_realized)}\n\n"

        if not shown:
            return text + "No positions found matching the specified criteria."

        text += "## Position Details\n\n"
        for index, position in enumerate(shown, start=1):
            text += f"### {index}. {position.market_question}\n\n"
            text += f"- **Market ID**: {position.market_id or 'N/A'}\n"
            text += f"- **Outcome**: {position.outcome or 'Unknown'}\n"
            text += f"- **Position Size**: {format_number(position.size, 4)} shares\n"
            text += f"- **Average Price**: {format_usd(position.avg_price, 4)}\n"
            text += f"- **Current Price**: {format_usd(position.current_price, 4)}\n"
            text += f"- **Initial Value**: {format_usd(position.initial_value)}\n"
            text += f"- **Current Value**: {format_usd(position.current_value)}\n"
            text += (
                f"- **Unrealized P&L**: {pnl_icon(position.pnl)} {format_usd(position.pnl)} "
                f"({position.pnl_percent:.2f}%)\n"
            )
            if position.realized_pnl != 0:
                text += (
                    f"- **Realized P&L**: {pnl_icon(position.realized_pnl)} "
                    f"{format_usd(position.realized_pnl)}\n"
                )
            text += f"- **Total Bought**: {format_usd(position.total_bought)}\n"
            text += f"- **Redeemable**: {'✅ Yes' if position.redeemable else '❌ No'}\n"
            text += f"- **Asset ID**: {position.asset or 'N/A'}\n"
            text += "\n---\n\n"

        return text + pagination_footer(len(positions), limit, offset)


class GetUserActivityTool(PolymarketTool):
    """Show a user's on-chain activity history."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_user_activity"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve user's on-chain activity history including trades, splits, "
            "merges, redeems, rewards, and conversions."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            _user_address_parameter(),
            limit_parameter("activities", 50, 100),
            offset_parameter("activities"),
            ToolParameter(
                name="activity_type",
                type="string",
                description="Filter by activity type",
                enum=ACTIVITY_TYPES,
            ),
            ToolParameter(
                name="side",
                type="string",
                description="Filter trades by side (BUY or SELL)",
                enum=["BUY", "SELL"],
            ),
            ToolParameter(
                name="market_id",
                type="string",
                description="Filter activities by specific market ID",
            ),
            ToolParameter(
                name="asset_id",
                type="string",
                description="Filter activities by specific asset/token ID",
            ),
            ToolParameter(
                name="order_by",
                type="string",
                description="Field to sort by (timestamp, amount, price)",
                enum=["timestamp", "amount", "price"],
                default="timestamp",
            ),
            order_direction_parameter(),
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
        ]

    @property
    def action(self) -> str:
        return "fetch user activity"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch a user's activity and render it with per-type counts."""
        user = params["user_address"]
        limit = clamp_limit(params.get("limit"), 50, 100)
        offset = clamp_offset(params.get("offset"))

        query: dict[str, Any] = {
            "limit": limit,
            "offset": offset,
            "order_by": params.get("order_by") or "timestamp",
            "order_direction": params.get("order_direction") or "DESC",
        }
        query.update(
            supplied(
                params, "activity_type", "side", "market_id", "asset_id", "start_date", "end_date"
            )
        )

        activities = parse_list(Activity, await self.client.get_user_activity(user, query))

        counts = Counter(a.activity_type for a in activities)
        trades = [a for a in activities if a.activity_type == "TRADE"]
        buys = sum(1 for a in trades if a.side == "BUY")
        sells = sum(1 for a in trades if a.side == "SELL")
        trade_volume = sum(a.amount for a in trades)

        text = (
            f"# User Activity History\n\n"
            f"Found {len(activities)} activities for user {short_address(user)}\n\n"
        )
        text += "## Activity Summary\n\n"
        text += f"- **Total Activities**: {len(activities)}\n"
        text += f"- **Trades**: {len(trades)} ({buys} buys, {sells} sells)\n"
        for activity_type, label in _ACTIVITY_LABELS:
            if counts[activity_type]:
                text += f"- **{label}**: {counts[activity_type]}\n"
        if trade_volume > 0:
            text += f"- **Total Trade Volume**: {format_usd(trade_volume)}\n"
        text += "\n"

        if not activities:
            return text + "No activities found matching the specified criteria."

        text += "## Activity Details\n\n"
        for index, activity in enumerate(activities, start=1):
            side = f" ({activity.side})" if activity.side else ""
            text += f"### {index}. {_activity_icon(activity)} {activity.activity_type or 'UNKNOWN'}{side}\n\n"
            text += f"- **Time**: {format_datetime(activity.timestamp)}\n"
            text += f"- **Market**: {activity.market_question}\n"
            if activity.outcome:
                text += f"- **Outcome**: {activity.outcome}\n"

            if activity.activity_type == "TRADE":
                text += f"- **Amount**: {format_number(activity.amount, 4)} shares\n"
                text += f"- **Price**: {format_usd(activity.price, 4)}\n"
                text += f"- **Total Value**: {format_usd(activity.amount * activity.price)}\n"
            elif activity.amount > 0:
                text += f"- **Amount**: {format_number(activity.amount, 4)}\n"

            text += f"- **Transaction**: {short_hash(activity.tx_hash)}\n"
            if activity.block_number:
                text += f"- **Block**: {activity.block_number}\n"
            if activity.gas_fee > 0:
                text += f"- **Gas Fee**: {format_usd(activity.gas_fee, 4)}\n"
            text += f"- **Market ID**: {activity.market_id or 'N/A'}\n"
            text += f"- **Asset ID**: {activity.asset_id or 'N/A'}\n"
            text += "\n---\n\n"

        return text + pagination_footer(len(activities), limit, offset)


def _activity_icon(activity: Activity) -> str:
    if activity.activity_type == "TRADE":
        return "🟢 📈" if activity.side == "BUY" else "🔴 📉"
    return _ACTIVITY_ICONS.get(activity.activity_type or "", "📊")
