# FILE: unloggarr/notifications/gotify.py
"""
Gotify push notifications.

Fire-and-forget: delivery failures are logged and reported through the
return value, never raised.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from unloggarr.settings import get_gotify_config

logger = logging.getLogger(__name__)

PRIORITY_NORMAL = 5
PRIORITY_ELEVATED = 6
PRIORITY_HIGH = 8
PRIORITY_CRITICAL = 10


async def send_notification(
    title: str,
    message: str,
    priority: int = PRIORITY_NORMAL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """Post a message to Gotify. Returns True when Gotify accepted it."""
    gotify_url, gotify_token = get_gotify_config()
    if not gotify_url or not gotify_token:
        logger.info("[gotify] URL or token not configured, skipping notification")
        return False

    priority = max(1, min(10, int(priority)))

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            resp = await client.post(
                f"{gotify_url.rstrip('/')}/message",
                headers={"X-Gotify-Key": gotify_token},
                json={"title": title, "message": message, "priority": priority},
            )
    except httpx.HTTPError as e:
        logger.error(f"[gotify] Error sending notification: {e}")
        return False

    if resp.is_success:
        logger.info("[gotify] Notification sent")
        return True

    logger.error(f"[gotify] Notification rejected: {resp.status_code} {resp.text}")
    return False


__all__ = [
    "PRIORITY_NORMAL",
    "PRIORITY_ELEVATED",
    "PRIORITY_HIGH",
    "PRIORITY_CRITICAL",
    "send_notification",
]
