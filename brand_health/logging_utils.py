"""
Structured logging helpers for aggregation workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def redact(text: str, *secrets: str | None) -> str:
    """
    Replace every non-empty secret in `text` with a placeholder.
    """

    for secret in secrets:
        if secret:
            text = text.replace(secret, "[REDACTED]")
    return text
