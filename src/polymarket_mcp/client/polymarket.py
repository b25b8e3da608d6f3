"""
HTTP client facade for the three Polymarket REST services.

Each service gets its own httpx.AsyncClient bound to a fixed base URL with a
fixed timeout and headers. The facade is a thin stateless pass-through: no
retries, no caching. Failures are normalized into PolymarketAPIError.
"""

import logging
from enum import Enum
from typing import Any

import httpx

from polymarket_mcp.client.exceptions import PolymarketAPIError
from polymarket_mcp.config.schema import ApiConfig

logger = logging.getLogger(__name__)

# Failures where the request went out but nothing usable came back
_NO_RESPONSE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class ServiceName(str, Enum):
    """Upstream services, keyed by the kind of data they serve."""

    METADATA = "metadata"  # Gamma API: markets and events
    USERDATA = "userdata"  # Data API: positions, activity, holders, trades
    ORDERBOOK = "orderbook"  # CLOB API: order books and prices


class PolymarketClient:
    """Async client for the Gamma, Data and CLOB APIs.

    Example:
        async with PolymarketClient() as client:
            markets = await client.get_markets({"limit": 5})
    """

    def __init__(
        self,
        api_config: ApiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize one HTTP client per upstream service.

        Args:
            api_config: Base URLs, timeout and user agent. Defaults apply when omitted.
            transport: Optional transport override (used by tests).
        """
        self.config = api_config or ApiConfig()
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }
        base_urls = {
            ServiceName.METADATA: self.config.gamma_url,
            ServiceName.USERDATA: self.config.data_url,
            ServiceName.ORDERBOOK: self.config.clob_url,
        }
        self._clients: dict[ServiceName, httpx.AsyncClient] = {
            service: httpx.AsyncClient(
                base_url=base_url,
                timeout=self.config.timeout,
                headers=headers,
                transport=transport,
            )
            for service, base_url in base_urls.items()
        }

    async def __aenter__(self) -> "PolymarketClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close all underlying HTTP clients."""
        for client in self._clients.values():
            await client.aclose()

    async def request(
        self,
        service: ServiceName | str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue a GET request and return the parsed JSON body.

        Args:
            service: Which upstream service to call
            path: Request path (e.g., "/markets")
            params: Query parameters. None values are dropped.

        Returns:
            Parsed JSON body, unmodified

        Raises:
            PolymarketAPIError: On non-2xx status, missing response, or a
                request that could not be sent
        """
        client = self._clients[ServiceName(service)]
        query = {k: _encode_param(v) for k, v in (params or {}).items() if v is not None}
        logger.debug(f"GET {client.base_url}{path} params={query}")

        try:
            response = await client.get(path, params=query)
        except _NO_RESPONSE_ERRORS as e:
            logger.debug(f"No response from {service}: {e!r}")
            raise PolymarketAPIError.no_response() from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PolymarketAPIError.request_failed(e) from e

        if not response.is_success:
            raise PolymarketAPIError.from_status(response.status_code, _error_detail(response))

        try:
            return response.json()
        except ValueError as e:
            raise PolymarketAPIError.request_failed(f"invalid JSON response: {e}") from e

    # =========================================================================
    # Gamma API
    # =========================================================================

    async def get_markets(self, params: dict[str, Any] | None = None) -> Any:
        """Get markets from the Gamma API."""
        return await self.request(ServiceName.METADATA, "/markets", params)

    async def get_events(self, params: dict[str, Any] | None = None) -> Any:
        """Get events from the Gamma API."""
        return await self.request(ServiceName.METADATA, "/events", params)

    async def search_markets(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Search markets with a text query."""
        return await self.get_markets({**(params or {}), "search": query})

    async def get_market_by_id(self, market_id: str) -> Any:
        """Get a single market, or None when the id is unknown."""
        markets = await self.get_markets({"id": market_id})
        return markets[0] if isinstance(markets, list) and markets else None

    async def get_event_by_id(self, event_id: str) -> Any:
        """Get a single event, or None when the id is unknown."""
        events = await self.get_events({"id": event_id})
        return events[0] if isinstance(events, list) and events else None

    async def get_trending_markets(self, limit: int = 10) -> Any:
        """Get active markets ordered by volume, highest first."""
        return await self.get_markets(
            {"active": True, "order": "volume", "ascending": False, "limit": limit}
        )

    async def get_active_markets(self, limit: int = 50) -> Any:
        """Get active markets that are not closed."""
        return await self.get_markets({"active": True, "closed": False, "limit": limit})

    async def get_markets_by_tag(self, tag_id: int, limit: int = 20) -> Any:
        """Get active markets carrying a tag."""
        return await self.get_markets({"tag_id": tag_id, "active": True, "limit": limit})

    # =========================================================================
    # Data API
    # =========================================================================

    async def get_user_positions(self, user: str, params: dict[str, Any] | None = None) -> Any:
        """Get a user's positions from the Data API."""
        return await self.request(ServiceName.USERDATA, "/positions", {"user": user, **(params or {})})

    async def get_user_activity(self, user: str, params: dict[str, Any] | None = None) -> Any:
        """Get a user's on-chain activity from the Data API."""
        return await self.request(ServiceName.USERDATA, "/activity", {"user": user, **(params or {})})

    async def get_market_holders(self, params: dict[str, Any] | None = None) -> Any:
        """Get holders of a market or token from the Data API."""
        return await self.request(ServiceName.USERDATA, "/holders", params)

    async def get_trades(self, params: dict[str, Any] | None = None) -> Any:
        """Get trades from the Data API."""
        return await self.request(ServiceName.USERDATA, "/trades", params)

    # =========================================================================
    # CLOB API
    # =========================================================================

    async def get_order_book(self, params: dict[str, Any] | None = None) -> Any:
        """Get an order book from the CLOB API."""
        return await self.request(ServiceName.ORDERBOOK, "/book", params)

    async def get_market_prices(self, params: dict[str, Any] | None = None) -> Any:
        """Get price history from the CLOB API."""
        return await self.request(ServiceName.ORDERBOOK, "/prices", params)

    def __repr__(self) -> str:
        """Representation."""
        return f"<PolymarketClient gamma={self.config.gamma_url} data={self.config.data_url} clob={self.config.clob_url}>"


def _encode_param(value: Any) -> Any:
    """Encode booleans the way the upstream APIs expect them."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _error_detail(response: httpx.Response) -> str | None:
    """Extract the upstream message or error field from an error response."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message") or body.get("error")
    return None
