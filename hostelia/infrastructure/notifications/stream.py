"""Lifecycle of a long-lived notification stream."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from functools import partial

from .channel import ChannelClosedError, SSEChannel
from .manager import NotificationConnectionManager
from .publisher import KEEPALIVE_FRAME, connected_event

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class NotificationStream:
    """Serve one user's SSE connection until the client goes away.

    The stream acknowledges the connection, registers its channel, relays
    queued frames and sends a keep-alive comment whenever it has been idle for
    ``keepalive_seconds``. Whatever ends the stream (client disconnect,
    cancellation, a closed channel), the channel is closed and removed from
    the registry.
    """

    def __init__(
        self,
        *,
        manager: NotificationConnectionManager,
        user_id: int,
        channel: SSEChannel,
        keepalive_seconds: float = 30.0,
        is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    ) -> None:
        self._manager = manager
        self._user_id = user_id
        self._channel = channel
        self._keepalive_seconds = keepalive_seconds
        self._is_disconnected = is_disconnected

    @property
    def channel(self) -> SSEChannel:
        return self._channel

    async def events(self) -> AsyncIterator[str]:
        channel = self._channel
        channel.on_close(partial(self._manager.deregister, self._user_id, channel))
        try:
            yield connected_event()
            self._manager.register(self._user_id, channel)
            while True:
                if self._is_disconnected is not None and await self._is_disconnected():
                    logger.info("SSE connection closed by client for user %s", self._user_id)
                    break
                try:
                    frame = await channel.next_frame(self._keepalive_seconds)
                except ChannelClosedError:
                    break
                yield KEEPALIVE_FRAME if frame is None else frame
        finally:
            channel.close()
            self._manager.deregister(self._user_id, channel)


__all__ = ["NotificationStream", "STREAM_HEADERS"]
