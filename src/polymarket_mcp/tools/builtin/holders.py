"""
Market holders tool (Data API) with ownership concentration statistics.
"""

import math
from datetime import datetime, timezone
from typing import Any

from polymarket_mcp.client import Holder, parse_holders
from polymarket_mcp.tools.base import clamp_limit, clamp_offset
from polymarket_mcp.tools.builtin.common import (
    PolymarketTool,
    limit_parameter,
    market_or_token_parameters,
    offset_parameter,
    order_direction_parameter,
    require_market_or_token,
    supplied,
)
from polymarket_mcp.tools.formatting import format_number, pagination_footer, short_address
from polymarket_mcp.tools.models import ToolParameter

TOP_HOLDERS = 10
BAR_WIDTH = 20

# Distribution analysis needs at least this many holders
MIN_HOLDERS_FOR_DISTRIBUTION = 5

# (label, lower bound exclusive, upper bound inclusive) in percent of supply
HOLDER_BUCKETS = [
    ("Whales (>5%)", 5.0, math.inf),
    ("Large Holders (1-5%)", 1.0, 5.0),
    ("Medium Holders (0.1-1%)", 0.1, 1.0),
    ("Small Holders (<0.1%)", -math.inf, 0.1),
]


def concentration_level(top_percentage: float) -> str:
    """Classify ownership by the share held by the top holders."""
    if top_percentage > 80:
        return "🔴 Very High (Concentrated ownership)"
    if top_percentage > 60:
        return "🟠 High (Somewhat concentrated)"
    if top_percentage > 40:
        return "🟡 Moderate (Balanced distribution)"
    return "🟢 Low (Well distributed)"


def share_bar(percentage: float) -> str:
    filled = max(0, min(math.floor(percentage * 2), BAR_WIDTH))
    return "█" * filled + "░" * (BAR_WIDTH - filled)


class GetMarketHoldersTool(PolymarketTool):
    """Show who holds shares of a market and how concentrated ownership is."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "get_market_holders"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Retrieve holders and their positions for a specific market. "
            "Shows who owns shares and their holding amounts."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        """Tool parameters."""
        return [
            *market_or_token_parameters("holders"),
            limit_parameter("holders", 50, 100),
            offset_parameter("holders"),
            ToolParameter(
                name="min_balance",
                type="number",
                description="Minimum balance threshold to include holders",
            ),
            ToolParameter(
                name="order_by",
                type="string",
                description="Field to sort by (balance, percentage)",
                enum=["balance", "percentage"],
                default="balance",
            ),
            order_direction_parameter(),
            ToolParameter(
                name="include_user_info",
                type="boolean",
                description="Include additional user information if available (default: true)",
                default=True,
            ),
        ]

    @property
    def action(self) -> str:
        return "fetch market holders"

    async def execute(self, params: dict[str, Any]) -> str:
        """Fetch holders and render statistics, holder list and distribution."""
        require_market_or_token(params)
        limit = clamp_limit(params.get("limit"), 50, 100)
        offset = clamp_offset(params.get("offset"))
        include_user_info = params.get("include_user_info", True)

        query: dict[str, Any] = {
            "limit": limit,
            "offset": offset,
            "order_by": params.get("order_by") or "balance",
            "order_direction": params.get("order_direction") or "DESC",
        }
        query.update(supplied(params, "market_id", "token_id", "min_balance"))

        page = parse_holders(await self.client.get_market_holders(query))
        holders = page.holders

        total_shares = sum(h.balance for h in holders)
        average = total_shares / len(holders) if holders else 0.0
        ranked = sorted(holders, key=lambda h: h.balance, reverse=True)
        top_shares = sum(h.balance for h in ranked[:TOP_HOLDERS])
        top_percentage = _percent(top_shares, total_shares)

        text = "# Market Holders\n\n"
        if params.get("market_id"):
            text += f"**Market ID**: {params['market_id']}\n"
            if page.market.question:
                text += f"**Market Question**: {page.market.question}\n"
        if params.get("token_id"):
            text += f"**Token ID**: {params['token_id']}\n"
        text += "\n"

        text += "## Holder Statistics\n\n"
        text += f"- **Total Holders**: {len(holders):,}\n"
        text += f"- **Total Shares**: {format_number(total_shares, 2)}\n"
        text += f"- **Average Holding**: {format_number(average, 2)} shares\n"
        text += f"- **Top {TOP_HOLDERS} Concentration**: {top_percentage:.2f}%\n"
        if ranked:
            largest = ranked[0].balance
            text += (
                f"- **Largest Holder**: {_percent(largest, total_shares):.2f}% "
                f"({format_number(largest)} shares)\n"
            )
        text += f"- **Concentration Level**: {concentration_level(top_percentage)}\n\n"

        if not holders:
            text += "No holders found matching the specified criteria."
        else:
            text += "## Top Holders\n\n"
            for index, holder in enumerate(holders):
                percentage = _percent(holder.balance, total_shares)
                text += _render_holder(holder, offset + index + 1, percentage, include_user_info)

            if len(holders) >= MIN_HOLDERS_FOR_DISTRIBUTION:
                text += _distribution(holders, total_shares)

            text += pagination_footer(len(holders), limit, offset)

        as_of = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        text += "\n---\n\n"
        text += f"*Holder data as of {as_of}*\n"
        if params.get("min_balance"):
            text += f"*Filtered by minimum balance: {format_number(params['min_balance'])} shares*\n"
        return text


def _percent(part: float, total: float) -> float:
    return part / total * 100 if total > 0 else 0.0


def _render_holder(holder: Holder, rank: int, percentage: float, include_user_info: bool) -> str:
    text = f"### {rank}. {holder.alias or short_address(holder.address)}\n\n"
    if include_user_info and holder.alias:
        text += f"- **Address**: {short_address(holder.address)}\n"
        if holder.bio:
            text += f"- **Bio**: {holder.bio}\n"
        if holder.verified:
            text += "- **Status**: ✅ Verified\n"
    else:
        text += f"- **Address**: {holder.address or 'Unknown'}\n"
    text += f"- **Holdings**: {format_number(holder.balance, 2)} shares\n"
    text += f"- **Percentage**: {percentage:.4f}%\n"
    text += f"- **Share**: `{share_bar(percentage)}` {percentage:.2f}%\n"
    if holder.token_id:
        text += f"- **Token ID**: {holder.token_id}\n"
    return text + "\n---\n\n"


def _distribution(holders: list[Holder], total_shares: float) -> str:
    text = "## Distribution Analysis\n\n"
    for label, lower, upper in HOLDER_BUCKETS:
        bucket = [
            h for h in holders if lower < _percent(h.balance, total_shares) <= upper
        ]
        bucket_share = _percent(sum(h.balance for h in bucket), total_shares)
        text += f"- **{label}**: {len(bucket)} holders ({bucket_share:.2f}% of supply)\n"
    return text + "\n"
