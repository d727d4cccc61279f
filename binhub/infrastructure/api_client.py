"""Marketplace API Client — wraps one shared httpx.AsyncClient with envelope and error mapping.

Invariants:
    - Every call returns ApiResult or raises a BinHubError subclass (never an httpx error)
    - success = HTTP 2xx AND body "success" is not false
    - HTTP 401 on a call that carried a token -> SessionExpiredError
    - Timeouts and transport failures -> ApiUnavailableError, reported once
    - None-valued query params are dropped before sending

Design Decisions:
    - No retry/backoff: a failed page load is shown as a toast and the user reloads
    - Transport injectable (httpx.MockTransport in tests) instead of monkeypatching
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from binhub.core.errors import ApiUnavailableError, ErrorContext, SessionExpiredError

logger = logging.getLogger(__name__)


@dataclass
class ApiResult:
    """Outcome of one API call, already unwrapped from the response envelope."""
    success: bool
    status_code: int
    data: Any = None
    message: str | None = None
    body: dict = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Value under data[key], else the top-level body[key]."""
        if isinstance(self.data, dict) and key in self.data:
            return self.data[key]
        if key in self.body:
            return self.body[key]
        return default

    def error_message(self, fallback: str) -> str:
        """API message for a failed call, else the caller's fixed text."""
        if self.body.get("message"):
            return str(self.body["message"])
        if self.body.get("error"):
            return str(self.body["error"])
        return fallback


def _decode(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {"data": body}


class MarketplaceApiClient:
    """Async client for the marketplace REST API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def aclose(self):
        await self.client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict | None = None,
        json: Any = None,
    ) -> ApiResult:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        clean_params = (
            {k: v for k, v in params.items() if v is not None} if params else None
        )
        context = ErrorContext(api_path=path, method=method)
        started = time.perf_counter()
        try:
            response = await self.client.request(
                method, path, params=clean_params, json=json, headers=headers,
            )
        except httpx.TimeoutException as e:
            self._log_failure(method, path, started, "timeout")
            raise ApiUnavailableError(str(e) or "timeout", "timeout", context=context)
        except httpx.TransportError as e:
            self._log_failure(method, path, started, "transport_error")
            raise ApiUnavailableError(
                str(e) or type(e).__name__, "transport_error", context=context,
            )

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            f"API {method} {path} -> {response.status_code}",
            extra={
                "api_path": path, "method": method,
                "status_code": response.status_code, "duration_ms": duration_ms,
            },
        )

        if response.status_code == 401 and token:
            context.status_code = 401
            raise SessionExpiredError(context=context)

        body = _decode(response)
        success = response.is_success and body.get("success") is not False
        message = body.get("message") or body.get("error")
        if not message and not response.is_success:
            message = f"HTTP {response.status_code}"
        return ApiResult(
            success=success,
            status_code=response.status_code,
            data=body.get("data"),
            message=str(message) if message else None,
            body=body,
        )

    async def get(self, path: str, *, token: str | None = None, params: dict | None = None) -> ApiResult:
        return await self.request("GET", path, token=token, params=params)

    async def post(self, path: str, *, token: str | None = None, json: Any = None) -> ApiResult:
        return await self.request("POST", path, token=token, json=json)

    async def put(self, path: str, *, token: str | None = None, json: Any = None) -> ApiResult:
        return await self.request("PUT", path, token=token, json=json)

    async def delete(self, path: str, *, token: str | None = None) -> ApiResult:
        return await self.request("DELETE", path, token=token)

    async def ping(self) -> bool:
        """Readiness probe: any HTTP answer from the API base URL counts as up."""
        try:
            await self.client.get("/")
        except httpx.HTTPError as e:
            logger.warning(f"API readiness probe failed: {e}")
            return False
        return True

    def _log_failure(self, method: str, path: str, started: float, failure_type: str):
        logger.error(
            f"API {method} {path} failed: {failure_type}",
            extra={
                "api_path": path, "method": method, "error_code": "API_UNAVAILABLE",
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
