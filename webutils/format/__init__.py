"""
Formatting module - Byte sizes and execution timing.
"""

from webutils.format.bytes import format_bytes
from webutils.format.measure import measure

__all__ = ["format_bytes", "measure"]
