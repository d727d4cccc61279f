"""Push Events Stream — relays the signed-in user's push notifications to the browser over SSE.

Invariants:
    - First frame is a "ready" event carrying the events this user can receive
    - Each notification frame carries refresh/toast flags computed for the subscribing page
    - A heartbeat comment is sent whenever no event arrived within the heartbeat interval
    - The browser queue is always unsubscribed when the stream ends (disconnect or cancel)
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from binhub.api.deps import AnyUser, AppSettings, Hub
from binhub.core.notifications import events_for_role
from binhub.infrastructure.push_listener import NotificationHub

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/events", tags=["events"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}

HEARTBEAT = ": heartbeat\n\n"


def sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


def ready_event(role: str) -> dict:
    return {"type": "ready", "data": {"events": list(events_for_role(role))}}


async def notification_stream(
    hub: NotificationHub,
    token: str,
    role: str,
    heartbeat_seconds: float,
    is_disconnected: Callable[[], Awaitable[bool]],
    page: str | None = None,
    page_request_id: str | None = None,
) -> AsyncIterator[str]:
    queue = await hub.subscribe(token, role)
    try:
        yield sse_line(ready_event(role))
        while not await is_disconnected():
            try:
                notification = await asyncio.wait_for(queue.get(), heartbeat_seconds)
            except asyncio.TimeoutError:
                yield HEARTBEAT
                continue
            yield sse_line(notification.to_sse_event(page, page_request_id))
    except asyncio.CancelledError:
        logger.info("Client disconnected from event stream", extra={"role": role})
        raise
    finally:
        await hub.unsubscribe(token, queue)


@router.get("/stream")
async def stream_events(
    request: Request,
    hub: Hub,
    settings: AppSettings,
    user: AnyUser,
    page: str | None = None,
    request_id: str | None = None,
):
    """SSE stream of push notifications for the signed-in user on one page."""
    return StreamingResponse(
        notification_stream(
            hub, user.token, user.role,
            settings.push_heartbeat_seconds,
            request.is_disconnected,
            page=page,
            page_request_id=request_id,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
