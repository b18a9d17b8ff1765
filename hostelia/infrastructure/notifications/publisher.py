"""Utility helpers to push notifications to live subscribers."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from hostelia.domain.entities import Notification

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)

KEEPALIVE_FRAME = ": ping\n\n"


def format_sse_event(payload: Mapping[str, Any]) -> str:
    """Frame ``payload`` as a single ``text/event-stream`` data event."""

    return f"data: {json.dumps(payload, default=str)}\n\n"


def connected_event() -> str:
    """Return the acknowledgement sent as soon as a stream opens."""

    return format_sse_event(
        {"type": "connected", "message": "SSE connection established"}
    )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the live payload representation for ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "relatedEntityId": notification.related_entity.id,
        "relatedEntityType": notification.related_entity.type,
        "read": notification.read,
        "readAt": notification.read_at.isoformat() if notification.read_at else None,
        "createdAt": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


class NotificationPublisher:
    """Best-effort delivery of freshly stored notifications.

    Persistence is the source of truth. Delivery failures are logged and the
    offending channel is dropped from the registry; they never reach the code
    that created the notification.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    @property
    def manager(self) -> NotificationConnectionManager:
        return self._manager

    def dispatch(self, notification: Notification) -> int:
        """Push ``notification`` to every open channel of its owner.

        Returns the number of channels that accepted the frame.
        """

        user_id = notification.user_id
        channels = self._manager.channels_for(user_id)
        if not channels:
            return 0

        frame = format_sse_event(serialize_notification(notification))
        delivered = 0
        for channel in channels:
            try:
                channel.write(frame)
            except Exception as exc:  # noqa: BLE001 - any failure marks the channel dead
                logger.warning(
                    "Failed to send notification %s via SSE to user %s: %s",
                    notification.id,
                    user_id,
                    exc,
                )
                self._manager.deregister(user_id, channel)
            else:
                delivered += 1
        return delivered

    def dispatch_many(self, notifications: Iterable[Notification]) -> int:
        """Dispatch ``notifications`` one after another, preserving order."""

        return sum(self.dispatch(notification) for notification in notifications)


__all__ = [
    "KEEPALIVE_FRAME",
    "NotificationPublisher",
    "connected_event",
    "format_sse_event",
    "serialize_notification",
]
