"""Root conftest — shared test configuration.

Invariants:
    - No test ever reaches a real marketplace API or push server
    - Every app fixture runs the real lifespan (api client + push hub created and closed)

Design Decisions:
    - httpx.MockTransport over monkeypatching: the real MarketplaceApiClient code path runs
    - Sign-in goes through POST /login so the signed session cookie is the real one
"""

import os

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests don't accidentally use a real API or production secrets
os.environ.setdefault("BINHUB_API_BASE_URL", "http://api.test/api")
os.environ.setdefault("BINHUB_SESSION_SECRET", "test-secret")
os.environ.setdefault("BINHUB_LOG_FORMAT", "text")

from binhub.config import Settings  # noqa: E402
from binhub.main import create_app  # noqa: E402
from tests.fakes import FakeMarketplace, FakeSocketFactory, sign_in_as  # noqa: E402


@pytest.fixture
def marketplace():
    return FakeMarketplace()


@pytest.fixture
def sockets():
    return FakeSocketFactory()


@pytest.fixture
def test_settings():
    return Settings(
        api_base_url="http://api.test/api",
        push_url="http://push.test",
        session_secret="test-secret",
        log_format="text",
        push_heartbeat_seconds=0.05,
    )


@pytest.fixture
async def app(test_settings, marketplace, sockets):
    application = create_app(test_settings, httpx.MockTransport(marketplace), sockets)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver",
    ) as c:
        yield c


@pytest.fixture
async def admin_client(client, marketplace):
    await sign_in_as(client, marketplace, "admin")
    return client


@pytest.fixture
async def customer_client(client, marketplace):
    await sign_in_as(client, marketplace, "customer")
    return client


@pytest.fixture
async def supplier_client(client, marketplace):
    await sign_in_as(client, marketplace, "supplier")
    return client
