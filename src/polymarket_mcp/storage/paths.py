"""
Path utilities for polymarket-mcp.

Provides consistent path resolution for configuration files.
"""

import os
from pathlib import Path


def get_home() -> Path:
    """
    Get the polymarket-mcp home directory.

    Resolution order:
    1. POLYMARKET_MCP_HOME environment variable
    2. Default: ~/.polymarket-mcp

    Returns:
        Path to the home directory.
    """
    env_home = os.environ.get("POLYMARKET_MCP_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".polymarket-mcp"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.polymarket-mcp/config.yaml
    """
    return get_home() / "config.yaml"
