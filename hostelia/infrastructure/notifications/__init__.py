"""Realtime notification helpers for the infrastructure layer."""

from .channel import ChannelClosedError, NotificationChannel, SSEChannel
from .manager import NotificationConnectionManager
from .publisher import (
    KEEPALIVE_FRAME,
    NotificationPublisher,
    connected_event,
    format_sse_event,
    serialize_notification,
)
from .stream import STREAM_HEADERS, NotificationStream

__all__ = [
    "ChannelClosedError",
    "NotificationChannel",
    "SSEChannel",
    "NotificationConnectionManager",
    "KEEPALIVE_FRAME",
    "NotificationPublisher",
    "connected_event",
    "format_sse_event",
    "serialize_notification",
    "STREAM_HEADERS",
    "NotificationStream",
]
