"""BinHub Web — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BinHubError -> toast + redirect (HTML) or JSON envelope
    - One shared marketplace API client and one notification hub per process,
      created in lifespan and closed on shutdown
    - Browser identity lives only in the signed session cookie

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests build an app with a mock transport and a fake push client
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from binhub.api.error_handlers import register_error_handlers
from binhub.api.routes import (
    auth, billing, bins, bookings, customer, dashboard, events, health,
    settings as settings_routes, supplier, users, wallets,
)
from binhub.config import Settings, get_settings
from binhub.infrastructure.api_client import MarketplaceApiClient
from binhub.infrastructure.observability import setup_logging
from binhub.infrastructure.push_listener import NotificationHub

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(
    settings: Settings | None = None,
    api_transport: httpx.AsyncBaseTransport | None = None,
    push_client_factory: Callable[[], Any] | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        app.state.api_client = MarketplaceApiClient(
            settings.api_base_url,
            timeout_seconds=settings.api_timeout_seconds,
            transport=api_transport,
        )
        app.state.push_hub = NotificationHub(
            settings.resolved_push_url,
            enabled=settings.push_enabled,
            client_factory=push_client_factory,
            connect_timeout=settings.push_connect_timeout_seconds,
        )
        logger.info(f"BinHub Web started (api={settings.api_base_url})")
        yield
        logger.info("BinHub Web shutting down")
        await app.state.push_hub.shutdown()
        await app.state.api_client.aclose()

    app = FastAPI(
        title="BinHub Web", version="1.0.0", lifespan=lifespan,
        docs_url=None, redoc_url=None,
    )

    app.state.settings = settings

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age_seconds,
        https_only=settings.https_only_cookies,
        same_site="lax",
    )

    register_error_handlers(app)

    # Routes: explicit registration
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(users.router)
    app.include_router(bins.router)
    app.include_router(bookings.router)
    app.include_router(billing.router)
    app.include_router(wallets.router)
    app.include_router(settings_routes.router)
    app.include_router(customer.router)
    app.include_router(supplier.router)
    app.include_router(events.router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    return app


app = create_app()
