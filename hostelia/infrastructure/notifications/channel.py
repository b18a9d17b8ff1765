"""Live-update channels used to push notifications to connected clients."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import anyio


class ChannelClosedError(RuntimeError):
    """Raised when writing to a channel that can no longer deliver frames."""


@runtime_checkable
class NotificationChannel(Protocol):
    """Minimal capability the registry and publisher rely on."""

    def write(self, frame: str) -> None:
        """Queue ``frame`` for delivery or raise when the channel is dead."""

    def on_close(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the channel closes."""

    def close(self) -> None:
        """Stop accepting frames and fire the close callbacks."""


_CLOSED = object()


class SSEChannel:
    """Frame queue feeding one ``text/event-stream`` response.

    The channel is bound to the event loop serving the stream. ``write`` may be
    called from any thread: sync endpoints run on a worker pool, so frames are
    handed to the loop with ``call_soon_threadsafe``.
    """

    def __init__(
        self,
        *,
        max_pending: int = 100,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._max_pending = max_pending
        self._pending = 0
        self._closed = False
        self._lock = threading.Lock()
        self._close_callbacks: list[Callable[[], None]] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, frame: str) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosedError("Channel is closed")
            overflow = self._pending >= self._max_pending
            if not overflow:
                self._pending += 1
        if overflow:
            # The client stopped reading; drop it so it reconnects and catches up.
            self.close()
            raise ChannelClosedError(
                f"Channel backlog exceeded {self._max_pending} frames"
            )
        self._enqueue(frame)

    def on_close(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._closed:
                self._close_callbacks.append(callback)
                return
        callback()

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            callbacks, self._close_callbacks = self._close_callbacks, []
        if not self._loop.is_closed():
            self._enqueue(_CLOSED)
        for callback in callbacks:
            callback()

    async def next_frame(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for the next frame.

        Returns ``None`` when the wait times out and raises
        :class:`ChannelClosedError` once the channel has been closed.
        """

        if self._closed and self._queue.empty():
            raise ChannelClosedError("Channel is closed")
        with anyio.move_on_after(timeout):
            item = await self._queue.get()
            if item is _CLOSED:
                raise ChannelClosedError("Channel is closed")
            with self._lock:
                self._pending -= 1
            return item  # type: ignore[return-value]
        return None

    def _enqueue(self, item: object) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._queue.put_nowait(item)
            return
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError as exc:
            raise ChannelClosedError("Event loop serving the channel is closed") from exc


__all__ = ["ChannelClosedError", "NotificationChannel", "SSEChannel"]
