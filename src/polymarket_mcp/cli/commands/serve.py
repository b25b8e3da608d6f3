"""
polymarket-mcp serve - Run the MCP server over stdio.

Usage:
    polymarket-mcp serve [--config PATH] [--log-level LEVEL]
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from polymarket_mcp.cli.output import print_error
from polymarket_mcp.config import ConfigurationError, load_config
from polymarket_mcp.log import setup_logging
from polymarket_mcp.server import serve

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def run_server(config_path: Path | None = None, log_level: str | None = None) -> None:
    """Load configuration, set up logging and serve until stdin closes.

    Raises:
        typer.Exit: With status 1 on invalid configuration or a fatal error
    """
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)

    if log_level:
        config.logging.level = log_level.upper()
    setup_logging(config.logging)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception(f"Fatal error in server: {e}")
        raise typer.Exit(1)


def serve_command(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a YAML config file.",
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-l",
            help=f"Log level ({', '.join(LOG_LEVELS)}).",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Run the MCP server over stdio."""
    if log_level and log_level.upper() not in LOG_LEVELS:
        print_error(f"Invalid log level: {log_level}")
        raise typer.Exit(1)
    run_server(config_path, log_level)
