"""
Structured logging helpers.
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


def mask_email(email: str | None) -> str:
    """
    Keep enough of an address to correlate log lines without storing it.

    "jane.doe@example.com" -> "j***@example.com"
    """

    if not email:
        return ""
    local, sep, domain = email.strip().partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain.lower()}"
