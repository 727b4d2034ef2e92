# FILE: unloggarr/notifications/router.py
"""
Server notification endpoint.

- GET /api/notifications - unread overview and recent notifications
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from unloggarr.deps import get_proxy_client
from unloggarr.mcpo.client import ProxyClient
from unloggarr.notifications.schemas import NotificationsResponse, ServerNotification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["notifications"])


def _normalize_notifications(items):
    """Validate proxy notifications; pass unknown shapes through untouched."""
    if not isinstance(items, list):
        return items
    try:
        return [ServerNotification.model_validate(i).model_dump(mode="json") for i in items]
    except ValidationError:
        return items


@router.get("/notifications", response_model=NotificationsResponse)
async def get_notifications(proxy: ProxyClient = Depends(get_proxy_client)):
    try:
        result = await proxy.fetch_notifications()
    except httpx.HTTPError as e:
        logger.exception("[notifications] Error fetching notifications")
        body = NotificationsResponse(
            success=False,
            overview={"unread": {"total": 0}},
            notifications=[],
            error=f"Failed to fetch notifications: {e}",
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    result["notifications"] = _normalize_notifications(result.get("notifications"))
    return NotificationsResponse(success=True, **result)


__all__ = ["router"]
