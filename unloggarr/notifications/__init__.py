"""
Notifications.

Outbound: Gotify push messages for scheduled analysis results.
Inbound: the home server's own notifications, read through the proxy.
"""

from unloggarr.notifications.gotify import send_notification

__all__ = ["send_notification"]
