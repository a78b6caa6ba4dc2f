"""
brand_health/services/timeout_guard.py

Race an awaitable operation against a timer.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from brand_health.logging_utils import log_event

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 5.0


def _discard_late_outcome(task: asyncio.Task) -> None:
    # Retrieve the exception so the loop does not report it as unhandled.
    if not task.cancelled():
        task.exception()


async def guard(
    operation: Callable[[], Awaitable[T]],
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    label: str = "operation",
    event_logger: logging.Logger | None = None,
) -> T | None:
    """
    Run `operation` and return its value, or None if it fails or times out.

    A timed-out operation is not cancelled: it keeps running and its eventual
    result or exception is discarded.
    """

    log = event_logger or logger
    started = time.perf_counter()
    try:
        task = asyncio.ensure_future(operation())
    except Exception as exc:
        log_event(
            log,
            logging.ERROR,
            "guarded_call_failed",
            label=label,
            error=f"{type(exc).__name__}: {exc}",
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return None

    done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

    if task not in done:
        task.add_done_callback(_discard_late_outcome)
        log_event(
            log,
            logging.WARNING,
            "guarded_call_timed_out",
            label=label,
            timeout_seconds=timeout_seconds,
            elapsed_ms=elapsed_ms,
        )
        return None

    if task.cancelled():
        log_event(log, logging.WARNING, "guarded_call_cancelled", label=label, elapsed_ms=elapsed_ms)
        return None

    error = task.exception()
    if error is not None:
        log_event(
            log,
            logging.ERROR,
            "guarded_call_failed",
            label=label,
            error=f"{type(error).__name__}: {error}",
            elapsed_ms=elapsed_ms,
        )
        return None

    return task.result()
