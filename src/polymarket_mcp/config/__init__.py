"""
Configuration management for polymarket-mcp.

This module provides configuration loading, merging, and validation.
"""

from polymarket_mcp.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
)
from polymarket_mcp.config.merger import deep_merge, set_nested_value
from polymarket_mcp.config.schema import ApiConfig, Config, LoggingConfig, ServerConfig

__all__ = [
    "ApiConfig",
    "Config",
    "ConfigurationError",
    "LoggingConfig",
    "ServerConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
