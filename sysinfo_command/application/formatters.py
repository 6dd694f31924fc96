"""
Formatting helpers for report values.
"""

from __future__ import annotations
from typing import Sequence

_GB = 1024 ** 3
_MB = 1024 ** 2


def bytes_to_gb(n: int) -> str:
    """Bytes as gigabytes with two decimals, without unit suffix."""
    return f"{n / _GB:.2f}"


def bytes_to_mb(n: int) -> str:
    """Bytes as megabytes with one decimal, without unit suffix."""
    return f"{n / _MB:.1f}"


def percentage(used: float, total: float, digits: int = 1) -> str:
    """`used` as a percentage of `total`; a zero total yields zero rather than raising."""
    if not total:
        return f"{0:.{digits}f}"
    return f"{(used / total) * 100:.{digits}f}"


def format_usage(used: int, total: int) -> str:
    return f"{bytes_to_gb(used)}GB / {bytes_to_gb(total)}GB ({percentage(used, total, 1)}% used)"


def format_uptime(uptime_ms: int) -> str:
    """Render elapsed milliseconds, keeping only the most significant units.

    Days drop seconds ("1d 1h 0m"); shorter spans show down to seconds.
    """
    seconds = uptime_ms // 1000
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_abis(abis: Sequence[str], limit: int = 3) -> str:
    out = ", ".join(abis[:limit])
    if len(abis) > limit:
        out += ", ..."
    return out


def format_fingerprint(fingerprint: str) -> str:
    parts = fingerprint.split("/")
    if len(parts) >= 3:
        return f"{parts[0]}/{parts[1]}/{parts[2]}/..."
    return fingerprint[:40] + "..."
