"""Tests for the user positions and activity tools."""

import pytest

from polymarket_mcp.tools.builtin import GetUserActivityTool, GetUserPositionsTool

USER = "0x1234567890abcdef1234567890abcdef12345678"


class TestGetUserPositionsTool:
    """Tests for get_user_positions."""

    @pytest.mark.asyncio
    async def test_requires_user_address(self, client, upstream):
        """Test a missing address fails before any request."""
        result = await GetUserPositionsTool(client).run({})

        assert result.is_error is True
        assert "required" in result.output
        assert "user_address" in result.output
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_default_query(self, client, upstream):
        """Test the dust threshold is applied by default."""
        upstream.add("/positions", [])

        await GetUserPositionsTool(client).run({"user_address": USER})

        assert upstream.params("/positions") == {
            "user": USER,
            "limit": "50",
            "offset": "0",
            "min_size": "0.01",
        }
        assert upstream.requests[0].url.host == "data-api.polymarket.com"

    @pytest.mark.asyncio
    async def test_show_zero_positions_drops_threshold(self, client, upstream):
        """Test zero positions are requested without a size threshold."""
        upstream.add("/positions", [])

        await GetUserPositionsTool(client).run(
            {"user_address": USER, "show_zero_positions": True, "limit": 1000}
        )

        params = upstream.params("/positions")
        assert "min_size" not in params
        assert params["limit"] == "100"

    @pytest.mark.asyncio
    async def test_explicit_min_size(self, client, upstream):
        """Test a caller-supplied threshold wins."""
        upstream.add("/positions", [])

        await GetUserPositionsTool(client).run(
            {"user_address": USER, "min_size": 5, "market_id": "m1"}
        )

        params = upstream.params("/positions")
        assert params["min_size"] == "5"
        assert params["market_id"] == "m1"

    @pytest.mark.asyncio
    async def test_portfolio_summary(self, client, upstream):
        """Test totals cover active positions only."""
        upstream.add(
            "/positions",
            [
                {
                    "title": "Will it rain?",
                    "conditionId": "c1",
                    "outcome": "Yes",
                    "size": 100,
                    "avgPrice": 0.4,
                    "curPrice": 0.5,
                    "initialValue": 40,
                    "currentValue": 50,
                    "cashPnl": 10,
                    "percentPnl": 25,
                    "realizedPnl": 2.5,
                    "totalBought": 40,
                    "redeemable": True,
                    "asset": "tok-1",
                },
                {"title": "Will it snow?", "size": 20, "currentValue": 30, "cashPnl": -15},
                {"title": "Closed out", "size": 0, "currentValue": 999, "cashPnl": 999},
            ],
        )

        result = await GetUserPositionsTool(client).run({"user_address": USER})
        text = result.output

        assert text.startswith("# User Positions\n\nFound 2 positions for user 0x1234...5678\n\n")
        assert "- **Active Positions**: 2\n" in text
        assert "- **Total Current Value**: $80.00\n" in text
        assert "- **Total Unrealized P&L**: 🔴 $-5.00\n" in text
        assert "- **Total Realized P&L**: 🟢 $2.50\n" in text
        assert "### 1. Will it rain?\n\n" in text
        assert "- **Market ID**: c1\n" in text
        assert "- **Position Size**: 100.0000 shares\n" in text
        assert "- **Average Price**: $0.4000\n" in text
        assert "- **Unrealized P&L**: 🟢 $10.00 (25.00%)\n" in text
        assert "- **Realized P&L**: 🟢 $2.50\n" in text
        assert "- **Redeemable**: ✅ Yes\n" in text
        assert "- **Asset ID**: tok-1\n" in text
        assert "### 2. Will it snow?\n\n" in text
        assert "- **Redeemable**: ❌ No\n" in text
        assert "Closed out" not in text

    @pytest.mark.asyncio
    async def test_no_positions(self, client, upstream):
        """Test the empty report skips the summary."""
        upstream.add("/positions", [])

        result = await GetUserPositionsTool(client).run({"user_address": USER})

        assert result.output == (
            "# User Positions\n\nFound 0 positions for user 0x1234...5678\n\n"
            "No positions found matching the specified criteria."
        )


class TestGetUserActivityTool:
    """Tests for get_user_activity."""

    @pytest.mark.asyncio
    async def test_requires_user_address(self, client, upstream):
        """Test a missing address fails before any request."""
        result = await GetUserActivityTool(client).run({"user_address": ""})

        assert result.is_error is True
        assert "required" in result.output
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_default_query(self, client, upstream):
        """Test ordering defaults are always sent."""
        upstream.add("/activity", [])

        await GetUserActivityTool(client).run({"user_address": USER, "side": "BUY"})

        assert upstream.params("/activity") == {
            "user": USER,
            "limit": "50",
            "offset": "0",
            "order_by": "timestamp",
            "order_direction": "DESC",
            "side": "BUY",
        }

    @pytest.mark.asyncio
    async def test_counts_and_details(self, client, upstream):
        """Test per-type counts, trade volume and per-activity rendering."""
        upstream.add(
            "/activity",
            [
                {
                    "type": "TRADE",
                    "side": "BUY",
                    "size": 10,
                    "price": 0.5,
                    "timestamp": 1700000000,
                    "title": "Market A",
                    "transactionHash": "0xabcdef0123456789",
                    "blockNumber": 123,
                },
                {"type": "TRADE", "side": "SELL", "size": 4, "price": 0.25},
                {"type": "REDEEM", "size": 3},
                {"type": "REWARD"},
            ],
        )

        result = await GetUserActivityTool(client).run({"user_address": USER})
        text = result.output

        assert "- **Total Activities**: 4\n" in text
        assert "- **Trades**: 2 (1 buys, 1 sells)\n" in text
        assert "- **Redeems**: 1\n" in text
        assert "- **Rewards**: 1\n" in text
        assert "Splits" not in text
        assert "- **Total Trade Volume**: $14.00\n" in text
        assert "### 1. 🟢 📈 TRADE (BUY)\n\n" in text
        assert "- **Time**: 2023-11-14 22:13:20 UTC\n" in text
        assert "- **Market**: Market A\n" in text
        assert "- **Total Value**: $5.00\n" in text
        assert "- **Transaction**: [0xabcdef01...](https://polygonscan.com/tx/0xabcdef0123456789)\n" in text
        assert "- **Block**: 123\n" in text
        assert "### 2. 🔴 📉 TRADE (SELL)\n\n" in text
        assert "### 3. 💰 REDEEM\n\n" in text
        assert "- **Amount**: 3.0000\n" in text
        assert "### 4. 🎁 REWARD\n\n" in text
        assert "- **Transaction**: N/A\n" in text

    @pytest.mark.asyncio
    async def test_empty(self, client, upstream):
        """Test the summary is still rendered with no activity."""
        upstream.add("/activity", [])

        result = await GetUserActivityTool(client).run({"user_address": USER})

        assert "- **Trades**: 0 (0 buys, 0 sells)\n" in result.output
        assert result.output.endswith("No activities found matching the specified criteria.")

    @pytest.mark.asyncio
    async def test_invalid_activity_type(self, client, upstream):
        """Test enum violations are reported without a request."""
        result = await GetUserActivityTool(client).run(
            {"user_address": USER, "activity_type": "STAKE"}
        )

        assert result.is_error is True
        assert result.output.startswith("❌ Failed to fetch user activity: Invalid value")
        assert upstream.requests == []
