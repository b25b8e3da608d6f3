"""
Client exceptions for polymarket-mcp.

Every upstream failure is raised as a single PolymarketAPIError; the
FailureType records which of the three failure modes produced it.
"""

from enum import Enum


class FailureType(Enum):
    """Classification of upstream request failures."""

    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"
    REQUEST_ERROR = "request_error"


class PolymarketAPIError(Exception):
    """Normalized error for any failed upstream request."""

    def __init__(
        self,
        message: str,
        failure_type: FailureType,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.failure_type = failure_type
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, detail: str | None) -> "PolymarketAPIError":
        """Upstream answered with a non-2xx status."""
        return cls(
            f"API Error {status_code}: {detail or 'Unknown error'}",
            FailureType.API_ERROR,
            status_code=status_code,
        )

    @classmethod
    def no_response(cls) -> "PolymarketAPIError":
        """Request was sent but no response arrived."""
        return cls("Network error: No response from server", FailureType.NETWORK_ERROR)

    @classmethod
    def request_failed(cls, cause: object) -> "PolymarketAPIError":
        """Request could not be built or sent."""
        return cls(f"Request error: {cause}", FailureType.REQUEST_ERROR)
