"""
Human-readable byte sizes.
"""

import math

UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_bytes(value: float, decimals: int = 2) -> str:
    """
    Format a byte count using decimal (base 1000) units.

    Args:
        value: Number of bytes
        decimals: Maximum number of decimal places; negative values count as 0

    Returns:
        Size string with trailing zeros trimmed, e.g. "1.5 KB"

    Examples:
        format_bytes(1500)        # "1.5 KB"
        format_bytes(1234, 0)     # "1 KB"
    """
    if not value or math.isnan(value):
        return "0 Bytes"

    decimals = max(decimals, 0)
    size = float(value)
    index = 0
    while abs(size) >= 1000 and index < len(UNITS) - 1:
        size /= 1000
        index += 1

    text = f"{size:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    return f"{text} {UNITS[index]}"
