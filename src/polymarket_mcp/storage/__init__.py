"""
Storage utilities for polymarket-mcp.

Provides path resolution for the configuration directory.
"""

from polymarket_mcp.storage.paths import get_global_config_path, get_home

__all__ = [
    "get_home",
    "get_global_config_path",
]
