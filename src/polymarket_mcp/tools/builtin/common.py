"""Shared pieces of the built-in Polymarket tools."""

from typing import Any

from polymarket_mcp.client import PolymarketClient
from polymarket_mcp.tools.base import Tool, ToolExecutionError
from polymarket_mcp.tools.models import ToolParameter


class PolymarketTool(Tool):
    """A tool backed by the Polymarket client."""

    def __init__(self, client: PolymarketClient):
        """Initialize the tool.

        Args:
            client: Shared upstream client
        """
        self.client = client
        super().__init__()


def supplied(params: dict[str, Any], *names: str) -> dict[str, Any]:
    """Copy only the named parameters that were actually given."""
    return {name: params[name] for name in names if params.get(name) not in (None, "")}


def require_market_or_token(params: dict[str, Any]) -> None:
    """Raise unless market_id or token_id was given."""
    if not params.get("market_id") and not params.get("token_id"):
        raise ToolExecutionError("Either market_id or token_id must be provided")


def limit_parameter(noun: str, default: int, maximum: int) -> ToolParameter:
    return ToolParameter(
        name="limit",
        type="number",
        description=f"Maximum number of {noun} to return (default: {default}, max: {maximum})",
        default=default,
    )


def offset_parameter(noun: str) -> ToolParameter:
    return ToolParameter(
        name="offset",
        type="number",
        description=f"Number of {noun} to skip for pagination (default: 0)",
        default=0,
    )


def order_direction_parameter() -> ToolParameter:
    return ToolParameter(
        name="order_direction",
        type="string",
        description="Sort direction (ASC or DESC)",
        enum=["ASC", "DESC"],
        default="DESC",
    )


def market_or_token_parameters(subject: str) -> list[ToolParameter]:
    """market_id / token_id pair; at least one must be given at call time."""
    return [
        ToolParameter(
            name="market_id",
            type="string",
            description=f"Market ID to get {subject} for",
        ),
        ToolParameter(
            name="token_id",
            type="string",
            description=f"Token/asset ID to get {subject} for",
        ),
    ]
