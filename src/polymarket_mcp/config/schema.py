"""
Pydantic configuration schema for polymarket-mcp.

Every value here is process-wide: it is read once at startup and never
varies per tool call.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_USER_AGENT = "polymarket-mcp/1.0.0"

# =============================================================================
# Upstream API Configuration
# =============================================================================


class ApiConfig(BaseModel):
    """Base URLs and transport settings for the three upstream services."""

    model_config = ConfigDict(extra="forbid")

    # Market and event metadata
    gamma_url: str = "https://gamma-api.polymarket.com"
    # Positions, activity, holders and trades
    data_url: str = "https://data-api.polymarket.com"
    # Order books and price history
    clob_url: str = "https://clob.polymarket.com"

    timeout: float = Field(default=30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration. Logs always go to stderr."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    rich_tracebacks: bool = True


# =============================================================================
# Server Configuration
# =============================================================================


class ServerConfig(BaseModel):
    """MCP server identity reported during initialization."""

    name: str = "polymarket-mcp"
    version: str = "1.0.0"
    instructions: str | None = None


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for polymarket-mcp.

    Configuration can be loaded from a YAML file and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="forbid")

    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
