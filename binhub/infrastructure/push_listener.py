"""Push Listener — one Socket.IO connection per API token, fanned out to browser queues.

Invariants:
    - At most one PushChannel per token; opened on first subscriber, closed when the last leaves
    - A channel only listens to the events of its user's role (core.notifications.ROLE_EVENTS)
    - Every received event is delivered to every queue of that token, in arrival order
    - Connection failure never fails the subscriber: it still gets heartbeats and
      sees fresh data on its next page load
    - Supplier unread badge counts survive channel close; reset explicitly
    - The hub lock only guards the registry; a pending connect holds up its own token alone

Design Decisions:
    - client_factory injectable (fake client in tests, socketio.AsyncClient in production)
    - Queues unbounded: events are tiny and a closed tab unsubscribes in its finally block
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import socketio

from binhub.core.notifications import (
    Notification, build_notification, events_for_role, increments_badge,
)

logger = logging.getLogger(__name__)


class PushChannel:
    """Socket.IO connection for one signed-in API token."""

    def __init__(
        self,
        token: str,
        role: str,
        url: str,
        client_factory: Callable[[], Any],
        on_notification: Callable[[str, str, Notification], None],
        connect_timeout: float = 5.0,
    ):
        self.token = token
        self.role = role
        self.url = url
        self.client_factory = client_factory
        self.on_notification = on_notification
        self.connect_timeout = connect_timeout
        self.queues: set[asyncio.Queue] = set()
        self.client = None
        self.connected = False
        self.opening: asyncio.Task | None = None

    def start(self):
        """Begin connecting in the background; subscribers await ready()."""
        self.opening = asyncio.ensure_future(self.open())

    async def ready(self):
        if self.opening is not None:
            await asyncio.shield(self.opening)

    async def open(self):
        self.client = self.client_factory()
        for event in events_for_role(self.role):
            self.client.on(event, handler=self._handler_for(event))
        try:
            await asyncio.wait_for(
                self.client.connect(self.url, auth={"token": self.token}),
                timeout=self.connect_timeout,
            )
        except (socketio.exceptions.ConnectionError, asyncio.TimeoutError, OSError) as e:
            logger.warning(
                f"Push channel connect failed: {e}",
                extra={"role": self.role, "error_code": "PUSH_CONNECT_FAILED"},
            )
            return
        self.connected = True
        logger.info("Push channel connected", extra={"role": self.role})

    def _handler_for(self, event: str):
        async def handler(*args):
            self.dispatch(event, args[0] if args else None)
        return handler

    def dispatch(self, event: str, payload: Any):
        notification = build_notification(event, payload)
        logger.info(
            f"Push event received: {event}",
            extra={"event": event, "role": self.role},
        )
        self.on_notification(self.token, self.role, notification)
        for queue in self.queues:
            queue.put_nowait(notification)

    async def close(self):
        await self.ready()
        if self.client is not None and self.connected:
            await self.client.disconnect()
        self.connected = False
        self.client = None


class NotificationHub:
    """Registry of push channels keyed by API token."""

    def __init__(
        self,
        url: str,
        enabled: bool = True,
        client_factory: Callable[[], Any] | None = None,
        connect_timeout: float = 5.0,
    ):
        self.url = url
        self.enabled = enabled
        self.client_factory = client_factory or (
            lambda: socketio.AsyncClient(reconnection=True)
        )
        self.connect_timeout = connect_timeout
        self.channels: dict[str, PushChannel] = {}
        self.unread: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def subscribe(self, token: str, role: str) -> asyncio.Queue:
        """New browser queue for token; opens the channel on first use."""
        queue: asyncio.Queue = asyncio.Queue()
        async with self._lock:
            channel = self.channels.get(token)
            if channel is None:
                channel = PushChannel(
                    token, role, self.url, self.client_factory,
                    self._count_unread, self.connect_timeout,
                )
                self.channels[token] = channel
                if self.enabled and events_for_role(role):
                    channel.start()
            channel.queues.add(queue)
        await channel.ready()
        return queue

    async def unsubscribe(self, token: str, queue: asyncio.Queue):
        async with self._lock:
            channel = self.channels.get(token)
            if channel is None:
                return
            channel.queues.discard(queue)
            if channel.queues:
                return
            del self.channels[token]
        await channel.close()

    def _count_unread(self, token: str, role: str, notification: Notification):
        if increments_badge(role, notification.event):
            self.unread[token] = self.unread.get(token, 0) + 1

    def unread_count(self, token: str | None) -> int:
        if not token:
            return 0
        return self.unread.get(token, 0)

    def reset_unread(self, token: str | None):
        if token:
            self.unread.pop(token, None)

    async def forget(self, token: str | None):
        """Drop everything held for token (logout)."""
        if not token:
            return
        self.unread.pop(token, None)
        async with self._lock:
            channel = self.channels.pop(token, None)
        if channel is not None:
            await channel.close()

    async def shutdown(self):
        async with self._lock:
            channels = list(self.channels.values())
            self.channels.clear()
        for channel in channels:
            await channel.close()
        logger.info(f"Notification hub closed {len(channels)} channel(s)")
