"""
Text rendering helpers shared by the built-in tools.

Numbers use thousands separators. Dates are rendered in UTC so reports are
deterministic regardless of the host's locale and timezone.
"""

from datetime import datetime, timezone
from typing import Any, Optional

# Epoch values above this are taken to be milliseconds
_EPOCH_MS_THRESHOLD = 1e12


def format_number(value: float, decimals: Optional[int] = None) -> str:
    """Format a number with thousands separators.

    Args:
        value: Number to format
        decimals: Fixed number of fraction digits. When None, up to three
            fraction digits are shown with trailing zeros trimmed.

    Returns:
        Formatted number
    """
    if decimals is not None:
        return f"{value:,.{decimals}f}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_usd(value: float, decimals: int = 2) -> str:
    """Format a dollar amount with a fixed number of fraction digits."""
    return f"${format_number(value, decimals)}"


def format_usd_or_na(value: float) -> str:
    """Format a dollar amount, or 'N/A' when it is zero or missing."""
    if not value:
        return "N/A"
    return f"${format_number(value)}"


def short_address(address: Optional[str]) -> str:
    """Abbreviate a wallet address to 0x1234...abcd."""
    if not address:
        return "Unknown"
    return f"{address[:6]}...{address[-4:]}"


def short_hash(tx_hash: Optional[str]) -> str:
    """Render a transaction hash as a Polygonscan link."""
    if not tx_hash:
        return "N/A"
    return f"[{tx_hash[:10]}...](https://polygonscan.com/tx/{tx_hash})"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 string or epoch seconds/milliseconds into a UTC datetime.

    Returns:
        Aware datetime in UTC, or None when the value cannot be parsed
    """
    if value is None or isinstance(value, bool) or value == "":
        return None

    if isinstance(value, str):
        text = value.strip()
        try:
            value = float(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)

    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    return None


def format_date(value: Any) -> str:
    """Render a date as YYYY-MM-DD (raw text when unparseable, 'N/A' when missing)."""
    if value is None or value == "":
        return "N/A"
    parsed = parse_timestamp(value)
    return parsed.strftime("%Y-%m-%d") if parsed else str(value)


def format_datetime(value: Any) -> str:
    """Render a timestamp as YYYY-MM-DD HH:MM:SS UTC."""
    if value is None or value == "":
        return "N/A"
    parsed = parse_timestamp(value)
    return parsed.strftime("%Y-%m-%d %H:%M:%S UTC") if parsed else str(value)


def pnl_icon(value: float) -> str:
    """Green for gains (or flat), red for losses."""
    return "🟢" if value >= 0 else "🔴"


def pagination_footer(count: int, limit: int, offset: int) -> str:
    """Hint at the next page when a full page came back."""
    if count != limit:
        return ""
    return f"\n*Showing {limit} results. Use offset={offset + limit} to see more.*\n"
