"""Notifications module - desktop and ntfy push delivery."""

from __future__ import annotations

from qdrant_local.notifications.ntfy import resolve_ntfy_endpoint, send_push_notification
from qdrant_local.notifications.system import send_system_notification

__all__ = [
    "resolve_ntfy_endpoint",
    "send_push_notification",
    "send_system_notification",
]
