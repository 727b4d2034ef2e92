# FILE: unloggarr/notifications/schemas.py
"""Schemas for server notifications relayed from the proxy."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class NotificationImportance(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ALERT = "ALERT"


class ServerNotification(BaseModel):
    id: str
    subject: str
    description: str = ""
    timestamp: Optional[str] = None
    importance: NotificationImportance = NotificationImportance.INFO


class NotificationsResponse(BaseModel):
    success: bool
    overview: dict[str, Any] = Field(default_factory=dict)
    notifications: Any = Field(default_factory=list)
    warning: Optional[str] = None
    error: Optional[str] = None


__all__ = ["NotificationImportance", "ServerNotification", "NotificationsResponse"]
