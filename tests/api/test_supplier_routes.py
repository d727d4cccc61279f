"""Supplier mobile view tests — inbox, quoting, jobs, bin assignment, fleet, availability, wallet."""

from tests.fakes import fail, ok

TOKEN = "supplier-token"


def _order_items():
    return [
        {"id": 101, "bin_type_name": "Skip Bin", "bin_size": "4m3"},
        {"id": 102, "bin_type_name": "Skip Bin", "bin_size": "6m3"},
    ]


def _available_bins():
    return [
        {"id": 31, "bin_code": "BIN-031", "status": "available",
         "bin_type_name": "Skip Bin", "bin_size": "4m3"},
        {"id": 32, "bin_code": "BIN-032", "status": "available",
         "bin_type_name": "Skip Bin", "bin_size": "6m3"},
    ]


def _assignment_routes(marketplace):
    marketplace.on("GET", "/bookings/77/order-items", ok(orderItems=_order_items()))
    marketplace.on("GET", "/bins/physical", {"success": True, "bins": _available_bins()})


# -- Dashboard & inbox -----------------------------------------------------------

async def test_dashboard(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/supplier/requests", ok(requests=[
        {"id": 1, "request_id": "REQ-2001", "status": "confirmed"},
    ]))
    marketplace.on("GET", "/wallet", ok(wallet={"balance": "250.00"}))
    marketplace.on("GET", "/bins/physical", {"success": True, "bins": _available_bins()})
    res = await supplier_client.get("/mobile/supplier/dashboard")
    assert res.status_code == 200
    assert "REQ-2001" in res.text
    assert "$250.00" in res.text
    assert 'data-page="supplier_dashboard"' in res.text


async def test_notifications_resets_unread_badge(supplier_client, marketplace, app):
    hub = app.state.push_hub
    hub.unread[TOKEN] = 3
    marketplace.on("GET", "/bookings/supplier/pending", ok(requests=[
        {"id": 5, "request_id": "REQ-2005", "status": "pending", "bin_type_name": "Skip Bin"},
    ]))
    res = await supplier_client.get("/mobile/supplier/notifications")
    assert res.status_code == 200
    assert "REQ-2005" in res.text
    assert hub.unread_count(TOKEN) == 0
    assert 'id="unread-badge" hidden' in res.text


async def test_unread_badge_shown_elsewhere(supplier_client, marketplace, app):
    app.state.push_hub.unread[TOKEN] = 2
    res = await supplier_client.get("/mobile/supplier/account")
    assert 'id="unread-badge">2<' in res.text


async def test_accept_request_goes_to_quote(supplier_client, marketplace):
    marketplace.on("POST", "/bookings/5/accept", ok(request={"id": 5}))
    res = await supplier_client.post("/mobile/supplier/requests/5/accept")
    assert res.headers["location"] == "/mobile/supplier/quote/5"


async def test_accept_request_failure_back_to_inbox(supplier_client, marketplace):
    marketplace.on("POST", "/bookings/5/accept", fail("Already taken"), status=409)
    res = await supplier_client.post("/mobile/supplier/requests/5/accept")
    assert res.headers["location"] == "/mobile/supplier/notifications"


async def test_quote_page_missing_request(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/5", fail("Not found"), status=404)
    res = await supplier_client.get("/mobile/supplier/quote/5")
    assert res.status_code == 303
    assert res.headers["location"] == "/mobile/supplier/notifications"


async def test_quote_page_renders(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/5", ok(request={
        "id": 5, "request_id": "REQ-2005", "status": "accepted", "location": "1 Test Rd",
    }))
    res = await supplier_client.get("/mobile/supplier/quote/5")
    assert res.status_code == 200
    assert "REQ-2005" in res.text
    assert "data-quote-form" in res.text


async def test_submit_quote_payload(supplier_client, marketplace):
    marketplace.on("POST", "/quotes", ok(quote={"id": 40}), status=201)
    res = await supplier_client.post("/mobile/supplier/quote/5", data={
        "total_price": "300", "additional_charges": "", "notes": "Includes tipping fee",
    })
    assert res.headers["location"] == "/mobile/supplier/jobs"
    assert marketplace.last_json("POST", "/quotes") == {
        "service_request_id": 5,
        "total_price": 300.0,
        "additional_charges": 0.0,
        "notes": "Includes tipping fee",
    }


async def test_quote_without_price_rejected(supplier_client, marketplace):
    await supplier_client.post("/mobile/supplier/quote/5", data={"total_price": "0"})
    assert marketplace.calls("POST", "/quotes") == []


# -- Jobs ----------------------------------------------------------------------

async def test_jobs_offer_next_action(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/supplier/requests", ok(requests=[
        {"id": 8, "request_id": "REQ-2008", "status": "delivered"},
    ]))
    res = await supplier_client.get("/mobile/supplier/jobs")
    assert "REQ-2008" in res.text
    assert 'value="ready_to_pickup"' in res.text


async def test_on_delivery_goes_through_assignment(supplier_client, marketplace):
    res = await supplier_client.post("/mobile/supplier/jobs/77/status", data={
        "status": "on_delivery",
    })
    assert res.headers["location"] == "/mobile/supplier/jobs/77/assign"
    assert marketplace.calls("PUT", "/bookings/77/status") == []


async def test_advance_job_status(supplier_client, marketplace):
    marketplace.on("PUT", "/bookings/77/status", ok(request={"id": 77}))
    res = await supplier_client.post("/mobile/supplier/jobs/77/status", data={
        "status": "delivered",
    })
    assert res.headers["location"] == "/mobile/supplier/jobs"
    assert marketplace.last_json("PUT", "/bookings/77/status") == {"status": "delivered"}


async def test_assign_page_matches_bins_to_items(supplier_client, marketplace):
    _assignment_routes(marketplace)
    res = await supplier_client.get("/mobile/supplier/jobs/77/assign")
    assert res.status_code == 200
    assert 'name="bin_101"' in res.text
    assert 'value="BIN-031"' in res.text
    params = marketplace.calls("GET", "/bins/physical")[-1].url.params
    assert params["status"] == "available"
    assert params["supplier_id"] == "3"


async def test_assign_requires_every_item(supplier_client, marketplace):
    _assignment_routes(marketplace)
    res = await supplier_client.post("/mobile/supplier/jobs/77/assign", data={
        "bin_101": "BIN-031", "bin_102": "",
    })
    assert res.headers["location"] == "/mobile/supplier/jobs/77/assign"
    assert marketplace.calls("PUT", "/bookings/77/status") == []
    page = await supplier_client.get("/mobile/supplier/jobs/77/assign")
    assert "Please select a bin for all order items" in page.text


async def test_assign_rejects_order_without_items(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/77/order-items", ok(orderItems=[]))
    marketplace.on("GET", "/bins/physical", {"success": True, "bins": _available_bins()})
    page = await supplier_client.get("/mobile/supplier/jobs/77/assign")
    assert "This order has no items" in page.text
    assert "disabled>Start Delivery" in page.text
    res = await supplier_client.post("/mobile/supplier/jobs/77/assign", data={})
    assert res.headers["location"] == "/mobile/supplier/jobs/77/assign"
    assert marketplace.calls("PUT", "/bookings/77/status") == []


async def test_assign_sends_codes_in_item_order(supplier_client, marketplace):
    _assignment_routes(marketplace)
    marketplace.on("PUT", "/bookings/77/status", ok(request={"id": 77}))
    res = await supplier_client.post("/mobile/supplier/jobs/77/assign", data={
        "bin_102": "BIN-032", "bin_101": "BIN-031",
    })
    assert res.headers["location"] == "/mobile/supplier/jobs"
    assert marketplace.last_json("PUT", "/bookings/77/status") == {
        "status": "on_delivery", "bin_codes": ["BIN-031", "BIN-032"],
    }


async def test_assign_items_unavailable(supplier_client, marketplace):
    marketplace.on("GET", "/bookings/77/order-items", fail("Not found"), status=404)
    res = await supplier_client.get("/mobile/supplier/jobs/77/assign")
    assert res.headers["location"] == "/mobile/supplier/jobs"


# -- Fleet & availability ---------------------------------------------------------

async def test_add_bin_payload(supplier_client, marketplace):
    marketplace.on("POST", "/bins/physical", ok(bin={"id": 50}), status=201)
    res = await supplier_client.post("/mobile/supplier/fleet", data={
        "bin_type_id": "1", "bin_size_id": "5", "notes": "",
    })
    assert res.headers["location"] == "/mobile/supplier/fleet"
    assert marketplace.last_json("POST", "/bins/physical") == {
        "bin_type_id": 1, "bin_size_id": 5,
    }


async def test_toggle_bin_back_to_availability(supplier_client, marketplace):
    marketplace.on("PUT", "/bins/physical/31", ok(bin={"id": 31}))
    res = await supplier_client.post(
        "/mobile/supplier/bins/31/status?back=availability", data={"status": "unavailable"},
    )
    assert res.headers["location"] == "/mobile/supplier/availability"
    assert marketplace.last_json("PUT", "/bins/physical/31") == {"status": "unavailable"}


async def test_bulk_availability_only_toggleable(supplier_client, marketplace):
    marketplace.on("GET", "/bins/physical", {"success": True, "bins": [
        {"id": 31, "bin_code": "BIN-031", "status": "available"},
        {"id": 32, "bin_code": "BIN-032", "status": "delivered"},
        {"id": 33, "bin_code": "BIN-033", "status": "unavailable"},
    ]})
    marketplace.on("PUT", "/bins/physical/31", ok(bin={}))
    marketplace.on("PUT", "/bins/physical/33", ok(bin={}))
    res = await supplier_client.post("/mobile/supplier/availability/bulk", data={
        "status": "unavailable",
    })
    assert res.headers["location"] == "/mobile/supplier/availability"
    assert len(marketplace.calls("PUT", "/bins/physical/31")) == 1
    assert len(marketplace.calls("PUT", "/bins/physical/33")) == 1
    assert marketplace.calls("PUT", "/bins/physical/32") == []
    page = await supplier_client.get("/mobile/supplier/availability")
    assert "All bins marked as unavailable" in page.text
    assert "BIN-032" not in page.text


async def test_operating_hours_kept_in_session(supplier_client, marketplace):
    marketplace.on("GET", "/bins/physical", {"success": True, "bins": []})
    res = await supplier_client.post("/mobile/supplier/availability/hours", data={
        "saturday_enabled": "true", "saturday_start": "08:00", "saturday_end": "12:00",
    })
    assert res.headers["location"] == "/mobile/supplier/availability"
    page = await supplier_client.get("/mobile/supplier/availability")
    assert 'name="saturday_enabled" value="true" checked' in page.text
    assert 'name="saturday_start" value="08:00"' in page.text
    assert 'name="monday_enabled" value="true">' in page.text
    assert "Operating hours saved (demo only)" in page.text


async def test_service_areas_add_and_remove(supplier_client):
    await supplier_client.post("/mobile/supplier/service-area", data={"area": "Parramatta"})
    await supplier_client.post("/mobile/supplier/service-area", data={"area": "Penrith"})
    page = await supplier_client.get("/mobile/supplier/service-area")
    assert "Parramatta" in page.text
    assert "Penrith" in page.text

    await supplier_client.post("/mobile/supplier/service-area/0/delete")
    page = await supplier_client.get("/mobile/supplier/service-area")
    assert "Parramatta" not in page.text
    assert "Penrith" in page.text


async def test_remove_unknown_service_area_is_noop(supplier_client):
    res = await supplier_client.post("/mobile/supplier/service-area/5/delete")
    assert res.headers["location"] == "/mobile/supplier/service-area"


# -- Wallet --------------------------------------------------------------------

def _wallet_routes(marketplace, balance="100.00"):
    marketplace.on("GET", "/wallet", ok(wallet={"balance": balance}))
    marketplace.on("GET", "/wallet/transactions", ok(transactions=[]))
    marketplace.on("GET", "/wallet/payouts", ok(payouts=[]))


async def test_payout_over_balance_rejected(supplier_client, marketplace):
    _wallet_routes(marketplace)
    res = await supplier_client.post("/mobile/supplier/wallet/payout", data={"amount": "150"})
    assert res.headers["location"] == "/mobile/supplier/wallet"
    assert marketplace.calls("POST", "/wallet/payout") == []
    page = await supplier_client.get("/mobile/supplier/wallet")
    assert "Invalid amount" in page.text


async def test_payout_not_a_number_rejected(supplier_client, marketplace):
    _wallet_routes(marketplace)
    await supplier_client.post("/mobile/supplier/wallet/payout", data={"amount": "abc"})
    assert marketplace.calls("POST", "/wallet/payout") == []
    assert marketplace.calls("GET", "/wallet") == []


async def test_payout_zero_rejected(supplier_client, marketplace):
    _wallet_routes(marketplace)
    await supplier_client.post("/mobile/supplier/wallet/payout", data={"amount": "0"})
    assert marketplace.calls("POST", "/wallet/payout") == []


async def test_payout_request(supplier_client, marketplace):
    _wallet_routes(marketplace)
    marketplace.on("POST", "/wallet/payout", ok(payout={"id": 1}), status=201)
    res = await supplier_client.post("/mobile/supplier/wallet/payout", data={"amount": "60.50"})
    assert res.headers["location"] == "/mobile/supplier/wallet"
    assert marketplace.last_json("POST", "/wallet/payout") == {
        "amount": 60.5, "payment_method": "bank_transfer",
    }
    page = await supplier_client.get("/mobile/supplier/wallet")
    assert "Payout request submitted successfully" in page.text


async def test_wallet_failure_toast(supplier_client, marketplace):
    marketplace.on("GET", "/wallet", fail("Wallet not found"), status=404)
    marketplace.on("GET", "/wallet/transactions", ok(transactions=[]))
    marketplace.on("GET", "/wallet/payouts", ok(payouts=[]))
    res = await supplier_client.get("/mobile/supplier/wallet")
    assert res.status_code == 200
    assert "Wallet not found" in res.text
