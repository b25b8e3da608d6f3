"""
Logging setup.

All log output goes to stderr: stdout carries the MCP protocol stream.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from polymarket_mcp.config import LoggingConfig

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Route the root logger through a rich handler on stderr.

    Calling this again replaces the previously installed handler.

    Args:
        config: Logging configuration (defaults apply when omitted)
    """
    config = config or LoggingConfig()

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=config.rich_tracebacks,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, RichHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level)

    # httpx logs every request at INFO; keep it for DEBUG runs only
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if config.level == "DEBUG" else logging.WARNING
    )
