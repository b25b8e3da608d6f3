"""Tests for the market prices tool."""

import pytest

from polymarket_mcp.tools.builtin import GetMarketPricesTool

HISTORY = {
    "history": [
        {"t": 1700000000, "p": 0.5},
        {"t": 1700003600, "p": 0.6, "v": 10},
    ]
}


class TestGetMarketPricesTool:
    """Tests for get_market_prices."""

    @pytest.mark.asyncio
    async def test_requires_market_or_token(self, client, upstream):
        """Test a call without identifiers fails before any request."""
        result = await GetMarketPricesTool(client).run({"interval": "1d"})

        assert result.is_error is True
        assert result.output == (
            "❌ Failed to fetch market prices: Either market_id or token_id must be provided"
        )
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_market_query(self, client, upstream):
        """Test the market id wins over the token id and fidelity is clamped."""
        upstream.add("/prices", HISTORY)
        upstream.add("/book", {"bids": [], "asks": []})

        text = (
            await GetMarketPricesTool(client).run(
                {"market_id": "m1", "token_id": "t1", "fidelity": 5000}
            )
        ).output

        assert upstream.params("/prices") == {"market": "m1", "interval": "1h", "fidelity": "1000"}
        assert upstream.params("/book") == {"market": "m1"}
        assert "## Market: m1\n\n" in text
        assert "*Data interval: 1h | Fidelity: 1000 points*\n" in text

    @pytest.mark.asyncio
    async def test_token_query(self, client, upstream):
        """Test a token-only request."""
        upstream.add("/prices", HISTORY)

        text = (
            await GetMarketPricesTool(client).run(
                {"token_id": "t1", "include_orderbook": False, "start_ts": 1700000000}
            )
        ).output

        assert upstream.params("/prices") == {
            "token_id": "t1",
            "interval": "1h",
            "fidelity": "100",
            "start_ts": "1700000000",
        }
        assert upstream.calls_to("/book") == []
        assert "## Token: t1\n\n" in text
        assert "*Time range: 2023-11-14 to latest*\n" in text

    @pytest.mark.asyncio
    async def test_history_statistics(self, client, upstream):
        """Test price change, range, recent points and volume stats."""
        upstream.add("/prices", HISTORY)

        text = (
            await GetMarketPricesTool(client).run({"token_id": "t1", "include_orderbook": False})
        ).output

        assert "### Price History (1h intervals)\n\n" in text
        assert "- **Current Price**: $0.6000\n" in text
        assert "- **Price Change**: 🟢 $0.1000 (20.00%)\n" in text
        assert "- **Period High**: $0.6000\n" in text
        assert "- **Period Low**: $0.5000\n" in text
        assert "- **Data Points**: 2\n" in text
        assert text.index("**2023-11-14 23:13:20 UTC**") < text.index("**2023-11-14 22:13:20 UTC**")
        assert "- Volume: 10 shares\n" in text
        assert "- **Peak Volume**: 10 shares\n" in text

    @pytest.mark.asyncio
    async def test_order_book_section(self, client, upstream):
        """Test the current market status from the order book."""
        upstream.add("/prices", HISTORY)
        upstream.add(
            "/book",
            {"bids": [{"price": 0.58, "size": 200}], "asks": [{"price": 0.6, "size": 150}]},
        )

        text = (await GetMarketPricesTool(client).run({"token_id": "t1"})).output

        assert "### Current Market Status\n\n" in text
        assert "- **Best Bid**: $0.5800\n" in text
        assert "#### Top 5 Bids\n1. $0.5800 × 200 shares\n" in text
        assert "#### Top 5 Asks\n1. $0.6000 × 150 shares\n" in text

    @pytest.mark.asyncio
    async def test_order_book_failure_is_ignored(self, client, upstream):
        """Test a failing order book request does not fail the report."""
        upstream.add("/prices", HISTORY)
        upstream.add("/book", {"error": "boom"}, status=500)

        result = await GetMarketPricesTool(client).run({"token_id": "t1"})

        assert result.is_error is False
        assert "Current Market Status" not in result.output
        assert "- **Current Price**: $0.6000\n" in result.output

    @pytest.mark.asyncio
    async def test_no_history(self, client, upstream):
        """Test the placeholder for an empty series."""
        upstream.add("/prices", [])

        text = (
            await GetMarketPricesTool(client).run({"market_id": "m1", "include_orderbook": False})
        ).output

        assert "No price history available for the specified parameters.\n\n" in text

    @pytest.mark.asyncio
    async def test_history_failure_is_an_error(self, client, upstream):
        """Test a failing price request fails the tool."""
        upstream.add("/prices", {"message": "bad market"}, status=400)

        result = await GetMarketPricesTool(client).run({"market_id": "m1"})

        assert result.is_error is True
        assert result.output == "❌ Failed to fetch market prices: API Error 400: bad market"
