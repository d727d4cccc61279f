"""Push listener tests — channel lifecycle, fan-out, unread badge.

Tests cover:
    - One channel per token, shared by every browser queue of that token
    - Handlers registered only for the role's events; token sent as connect auth
    - Channel closed (client disconnected) when the last queue leaves
    - Disabled hub / admin role / failed connect: queue still returned, nothing raised
    - Supplier new_request increments unread; reset and forget clear it
    - A pending connect for one token never blocks other tokens
"""

import asyncio

from binhub.infrastructure.push_listener import NotificationHub
from tests.fakes import FakeSocketFactory

URL = "http://push.test"


def _hub(factory=None, enabled=True) -> NotificationHub:
    return NotificationHub(URL, enabled=enabled, client_factory=factory or FakeSocketFactory())


async def test_subscribe_opens_one_channel_per_token():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("tok", "supplier")
    await hub.subscribe("tok", "supplier")
    assert len(factory.clients) == 1
    client = factory.clients[0]
    assert client.connected
    assert client.url == URL
    assert client.auth == {"token": "tok"}
    assert set(client.handlers) == {
        "new_request", "request_accepted", "quote_accepted", "payment_received",
    }


async def test_customer_channel_listens_to_customer_events():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("ctok", "customer")
    assert set(factory.clients[0].handlers) == {"new_quote", "request_status_updated"}


async def test_event_fans_out_to_every_queue():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    q1 = await hub.subscribe("tok", "customer")
    q2 = await hub.subscribe("tok", "customer")
    await factory.clients[0].fire("new_quote", {"request": {"request_id": "REQ-5"}})
    n1 = q1.get_nowait()
    n2 = q2.get_nowait()
    assert n1 == n2
    assert n1.message == "New quote received!"
    assert n1.request_id == "REQ-5"


async def test_events_delivered_in_arrival_order():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    queue = await hub.subscribe("tok", "supplier")
    await factory.clients[0].fire("new_request", {})
    await factory.clients[0].fire("payment_received", {})
    assert queue.get_nowait().event == "new_request"
    assert queue.get_nowait().event == "payment_received"


async def test_last_unsubscribe_closes_channel():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    q1 = await hub.subscribe("tok", "supplier")
    q2 = await hub.subscribe("tok", "supplier")
    await hub.unsubscribe("tok", q1)
    assert "tok" in hub.channels
    assert factory.clients[0].connected
    await hub.unsubscribe("tok", q2)
    assert "tok" not in hub.channels
    assert factory.clients[0].disconnected


async def test_unsubscribe_unknown_token_is_noop():
    hub = _hub()
    await hub.unsubscribe("nobody", asyncio.Queue())
    assert hub.channels == {}


async def test_disabled_hub_never_connects():
    factory = FakeSocketFactory()
    hub = _hub(factory, enabled=False)
    queue = await hub.subscribe("tok", "supplier")
    assert isinstance(queue, asyncio.Queue)
    assert factory.clients == []


async def test_admin_has_no_push_connection():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("atok", "admin")
    assert factory.clients == []


async def test_connect_failure_is_not_fatal(caplog):
    factory = FakeSocketFactory(fail_connect=True)
    hub = _hub(factory)
    queue = await hub.subscribe("tok", "customer")
    assert isinstance(queue, asyncio.Queue)
    assert hub.channels["tok"].connected is False
    assert "Push channel connect failed" in caplog.text
    await hub.unsubscribe("tok", queue)
    assert factory.clients[0].disconnected is False


async def test_unread_counts_supplier_new_requests():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("tok", "supplier")
    client = factory.clients[0]
    await client.fire("new_request", {"request": {"bin_type_name": "Skip"}})
    await client.fire("new_request", {})
    await client.fire("payment_received", {})
    assert hub.unread_count("tok") == 2
    hub.reset_unread("tok")
    assert hub.unread_count("tok") == 0


async def test_unread_survives_channel_close():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    queue = await hub.subscribe("tok", "supplier")
    await factory.clients[0].fire("new_request", {})
    await hub.unsubscribe("tok", queue)
    assert hub.unread_count("tok") == 1


async def test_forget_drops_channel_and_badge():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("tok", "supplier")
    await factory.clients[0].fire("new_request", {})
    await hub.forget("tok")
    assert hub.unread_count("tok") == 0
    assert "tok" not in hub.channels
    assert factory.clients[0].disconnected


async def test_unread_count_without_token():
    hub = _hub()
    assert hub.unread_count(None) == 0
    await hub.forget(None)


async def test_shutdown_closes_all_channels():
    factory = FakeSocketFactory()
    hub = _hub(factory)
    await hub.subscribe("a", "supplier")
    await hub.subscribe("b", "customer")
    await hub.shutdown()
    assert hub.channels == {}
    assert all(c.disconnected for c in factory.clients)


async def test_pending_connect_does_not_block_other_tokens():
    factory = FakeSocketFactory()
    factory.gate = asyncio.Event()
    hub = _hub(factory)
    slow = asyncio.create_task(hub.subscribe("slow", "supplier"))
    while not factory.clients:
        await asyncio.sleep(0)
    assert "slow" in hub.channels
    factory.gate = None

    await asyncio.wait_for(hub.forget("other"), timeout=0.5)
    queue = await asyncio.wait_for(hub.subscribe("fast", "customer"), timeout=0.5)
    assert hub.channels["fast"].connected
    await asyncio.wait_for(hub.unsubscribe("fast", queue), timeout=0.5)
    assert not slow.done()

    factory.clients[0].gate.set()
    await slow
    assert hub.channels["slow"].connected


async def test_second_subscriber_waits_for_shared_connect():
    factory = FakeSocketFactory()
    factory.gate = asyncio.Event()
    hub = _hub(factory)
    first = asyncio.create_task(hub.subscribe("tok", "supplier"))
    second = asyncio.create_task(hub.subscribe("tok", "supplier"))
    await asyncio.sleep(0)
    assert not second.done()
    factory.gate.set()
    await asyncio.gather(first, second)
    assert len(factory.clients) == 1
    assert len(hub.channels["tok"].queues) == 2
