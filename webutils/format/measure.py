"""
Execution timing.
"""

import inspect
import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


async def measure(key: str, callback: Callable[[], Any]) -> Any:
    """
    Run a callback and log how long it took.

    The duration is logged even when the callback raises.

    Args:
        key: Label used in the log line
        callback: Sync function or coroutine function taking no arguments

    Returns:
        Whatever the callback returned (awaited if it was awaitable)
    """
    start = time.perf_counter()
    try:
        result = callback()
        if inspect.isawaitable(result):
            result = await result
        return result
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000)
        logger.info(f"{key} took {elapsed_ms}ms")
