"""Tests for the Polymarket HTTP client facade."""

import httpx
import pytest

from polymarket_mcp.client import (
    FailureType,
    PolymarketAPIError,
    PolymarketClient,
    ServiceName,
)
from polymarket_mcp.config import ApiConfig


class TestPolymarketAPIError:
    """Tests for the normalized error."""

    def test_from_status_with_detail(self):
        """Test status errors carry the upstream detail."""
        error = PolymarketAPIError.from_status(404, "not found")
        assert str(error) == "API Error 404: not found"
        assert error.failure_type == FailureType.API_ERROR
        assert error.status_code == 404

    def test_from_status_without_detail(self):
        """Test status errors fall back to 'Unknown error'."""
        error = PolymarketAPIError.from_status(500, None)
        assert str(error) == "API Error 500: Unknown error"

    def test_no_response(self):
        """Test the fixed network error message."""
        error = PolymarketAPIError.no_response()
        assert str(error) == "Network error: No response from server"
        assert error.failure_type == FailureType.NETWORK_ERROR
        assert error.status_code is None

    def test_request_failed(self):
        """Test request errors wrap the cause."""
        error = PolymarketAPIError.request_failed("bad url")
        assert str(error) == "Request error: bad url"
        assert error.failure_type == FailureType.REQUEST_ERROR


class TestRequest:
    """Tests for PolymarketClient.request."""

    @pytest.mark.asyncio
    async def test_routes_services_to_base_urls(self, client, upstream):
        """Test each service hits its own host."""
        upstream.add("/markets", [])
        upstream.add("/trades", [])
        upstream.add("/book", {})

        await client.request(ServiceName.METADATA, "/markets")
        await client.request(ServiceName.USERDATA, "/trades")
        await client.request(ServiceName.ORDERBOOK, "/book")

        hosts = [r.url.host for r in upstream.requests]
        assert hosts == [
            "gamma-api.polymarket.com",
            "data-api.polymarket.com",
            "clob.polymarket.com",
        ]

    @pytest.mark.asyncio
    async def test_accepts_service_name_string(self, client, upstream):
        """Test services can be named by their string value."""
        upstream.add("/events", [{"id": "1"}])

        assert await client.request("metadata", "/events") == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_returns_body_unmodified(self, client, upstream):
        """Test the parsed body is returned as-is."""
        payload = {"data": [{"id": 1, "nested": {"x": [1, 2]}}]}
        upstream.add("/markets", payload)

        assert await client.get_markets() == payload

    @pytest.mark.asyncio
    async def test_drops_none_params_and_encodes_booleans(self, client, upstream):
        """Test query building."""
        upstream.add("/markets", [])

        await client.get_markets({"limit": 5, "active": True, "closed": False, "search": None})

        assert upstream.params("/markets") == {"limit": "5", "active": "true", "closed": "false"}

    @pytest.mark.asyncio
    async def test_sends_fixed_headers(self, client, upstream):
        """Test content type and user agent headers."""
        upstream.add("/markets", [])

        await client.get_markets()

        request = upstream.requests[0]
        assert request.headers["User-Agent"] == "polymarket-mcp/1.0.0"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_status_error_uses_message(self, client, upstream):
        """Test a 404 with a message field."""
        upstream.add("/markets", {"message": "not found"}, status=404)

        with pytest.raises(PolymarketAPIError, match="API Error 404: not found") as exc_info:
            await client.get_markets()

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_status_error_uses_error_field(self, client, upstream):
        """Test the error field is used when message is absent."""
        upstream.add("/trades", {"error": "rate limited"}, status=429)

        with pytest.raises(PolymarketAPIError, match="API Error 429: rate limited"):
            await client.get_trades()

    @pytest.mark.asyncio
    async def test_status_error_without_detail(self, client, upstream):
        """Test a non-JSON error body."""
        upstream.add("/book", "oops", status=502)

        with pytest.raises(PolymarketAPIError, match="API Error 502: Unknown error"):
            await client.get_order_book({"token_id": "1"})

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, client, upstream):
        """Test timeouts map to the no-response error."""
        upstream.add("/markets", error=httpx.ReadTimeout("timed out"))

        with pytest.raises(PolymarketAPIError) as exc_info:
            await client.get_markets()

        assert str(exc_info.value) == "Network error: No response from server"
        assert exc_info.value.failure_type == FailureType.NETWORK_ERROR

    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self, client, upstream):
        """Test connection failures map to the no-response error."""
        upstream.add("/markets", error=httpx.ConnectError("refused"))

        with pytest.raises(PolymarketAPIError, match="Network error"):
            await client.get_markets()

    @pytest.mark.asyncio
    async def test_unsupported_protocol_is_request_error(self, client, upstream):
        """Test a request that cannot be sent."""
        upstream.add("/markets", error=httpx.UnsupportedProtocol("no such scheme"))

        with pytest.raises(PolymarketAPIError) as exc_info:
            await client.get_markets()

        assert str(exc_info.value) == "Request error: no such scheme"
        assert exc_info.value.failure_type == FailureType.REQUEST_ERROR

    @pytest.mark.asyncio
    async def test_invalid_json_is_request_error(self, upstream):
        """Test an undecodable success body."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        async with PolymarketClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(PolymarketAPIError, match="Request error: invalid JSON response"):
                await client.get_markets()


class TestEndpointHelpers:
    """Tests for the endpoint and convenience helpers."""

    @pytest.mark.asyncio
    async def test_user_endpoints_send_user(self, client, upstream):
        """Test positions and activity prepend the user param."""
        upstream.add("/positions", [])
        upstream.add("/activity", [])

        await client.get_user_positions("0xabc", {"limit": 10})
        await client.get_user_activity("0xdef")

        assert upstream.params("/positions") == {"user": "0xabc", "limit": "10"}
        assert upstream.params("/activity") == {"user": "0xdef"}

    @pytest.mark.asyncio
    async def test_data_and_clob_paths(self, client, upstream):
        """Test the remaining endpoints hit the right paths."""
        for path in ("/holders", "/trades", "/book", "/prices"):
            upstream.add(path, [])

        await client.get_market_holders({"market_id": "m"})
        await client.get_trades()
        await client.get_order_book({"market": "m"})
        await client.get_market_prices({"market": "m"})

        assert [r.url.path for r in upstream.requests] == ["/holders", "/trades", "/book", "/prices"]
        assert upstream.requests[2].url.host == "clob.polymarket.com"

    @pytest.mark.asyncio
    async def test_search_markets(self, client, upstream):
        """Test search adds the query to the params."""
        upstream.add("/markets", [])

        await client.search_markets("election", {"limit": 3})

        assert upstream.params("/markets") == {"limit": "3", "search": "election"}

    @pytest.mark.asyncio
    async def test_get_market_by_id(self, client, upstream):
        """Test single-market lookup returns the first element."""
        upstream.add("/markets", [{"id": "42"}])

        assert await client.get_market_by_id("42") == {"id": "42"}
        assert upstream.params("/markets") == {"id": "42"}

    @pytest.mark.asyncio
    async def test_get_event_by_id_missing(self, client, upstream):
        """Test an unknown event id yields None."""
        upstream.add("/events", [])

        assert await client.get_event_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_trending_markets(self, client, upstream):
        """Test trending markets are active and ordered by volume."""
        upstream.add("/markets", [])

        await client.get_trending_markets(limit=5)

        assert upstream.params("/markets") == {
            "active": "true",
            "order": "volume",
            "ascending": "false",
            "limit": "5",
        }

    @pytest.mark.asyncio
    async def test_active_and_tagged_markets(self, client, upstream):
        """Test the active and by-tag helpers."""
        upstream.add("/markets", [])

        await client.get_active_markets()
        assert upstream.params("/markets") == {"active": "true", "closed": "false", "limit": "50"}

        await client.get_markets_by_tag(7)
        assert upstream.params("/markets") == {"tag_id": "7", "active": "true", "limit": "20"}


class TestClientLifecycle:
    """Tests for configuration and cleanup."""

    @pytest.mark.asyncio
    async def test_custom_config(self, upstream):
        """Test base URLs and user agent come from the config."""
        upstream.add("/markets", [])
        config = ApiConfig(gamma_url="https://gamma.example.test", user_agent="custom/2.0")

        async with PolymarketClient(config, transport=upstream.transport) as client:
            await client.get_markets()

        request = upstream.requests[0]
        assert request.url.host == "gamma.example.test"
        assert request.headers["User-Agent"] == "custom/2.0"

    def test_repr(self):
        """Test representation lists the base URLs."""
        client = PolymarketClient()
        assert "gamma-api.polymarket.com" in repr(client)
