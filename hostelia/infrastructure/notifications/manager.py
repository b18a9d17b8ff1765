"""Registry of live notification channels grouped by user."""

from __future__ import annotations

import logging
import threading

from .channel import NotificationChannel

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track the channels currently open for each user.

    The registry is process local. It is built once by the application factory
    and injected wherever it is needed; nothing here performs I/O. A lock guards
    the per-user sets because writers run both on the event loop and on the
    worker threads that serve sync endpoints.
    """

    def __init__(self) -> None:
        self._connections: dict[int, set[NotificationChannel]] = {}
        self._lock = threading.Lock()

    def register(self, user_id: int, channel: NotificationChannel) -> None:
        """Add ``channel`` to the pool for ``user_id``."""

        with self._lock:
            self._connections.setdefault(user_id, set()).add(channel)
            total = len(self._connections[user_id])
        logger.info("SSE connection added for user %s (%s open)", user_id, total)

    def deregister(self, user_id: int, channel: NotificationChannel) -> None:
        """Remove ``channel`` from the pool for ``user_id``.

        Safe to call repeatedly and for channels that were never registered.
        """

        with self._lock:
            connections = self._connections.get(user_id)
            if connections is None or channel not in connections:
                return
            connections.discard(channel)
            remaining = len(connections)
            if not connections:
                del self._connections[user_id]
        logger.info("SSE connection removed for user %s (%s open)", user_id, remaining)

    def channels_for(self, user_id: int) -> frozenset[NotificationChannel]:
        """Return a snapshot of the channels open for ``user_id``."""

        with self._lock:
            return frozenset(self._connections.get(user_id, ()))

    def connection_count(self, user_id: int | None = None) -> int:
        """Return the number of open channels, for one user or overall."""

        with self._lock:
            if user_id is not None:
                return len(self._connections.get(user_id, ()))
            return sum(len(channels) for channels in self._connections.values())


__all__ = ["NotificationConnectionManager"]
