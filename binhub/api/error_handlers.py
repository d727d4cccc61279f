"""Error Handlers — global exception handlers for the BinHub web app.

Invariants:
    - NotAuthenticatedError / SessionExpiredError -> session cleared, redirect to /login
    - RoleForbiddenError -> redirect to the signed-in role's home
    - Other BinHubError -> error toast + redirect back (HTML) or JSON envelope (JSON paths)
    - RequestValidationError -> first field message as toast + redirect back
    - Exception (catch-all) -> 500 error page, never leaks internal details

Design Decisions:
    - Four-layer handler: auth, domain (BinHubError), validation (Pydantic), catch-all
    - JSON paths (/catalog, /events, /health) keep the structured envelope
    - Error redirects only follow a same-origin Referer, reduced to its path and query
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.datastructures import URL
from starlette.exceptions import HTTPException as StarletteHTTPException

from binhub.api.deps import home_url, session_user, sign_out
from binhub.api.flash import push_error, push_toast
from binhub.api.rendering import render
from binhub.core.domain_types import ToastKind
from binhub.core.errors import (
    BinHubError, ErrorCategory, ErrorSeverity, NotAuthenticatedError, RoleForbiddenError,
    SessionExpiredError,
)

logger = logging.getLogger(__name__)

JSON_PREFIXES = ("/catalog", "/events", "/health")
FALLBACK_URL = "/dashboard"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_auth_error_handlers(app)
    _register_binhub_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def wants_json(request: Request) -> bool:
    return request.url.path.startswith(JSON_PREFIXES)


def back_url(request: Request) -> str:
    """Same-origin Referer as a local path, else the dashboard entry point."""
    referer = request.headers.get("referer")
    if not referer:
        return FALLBACK_URL
    origin = URL(referer)
    if origin.netloc != request.url.netloc or origin.path.startswith("//"):
        return FALLBACK_URL
    path = origin.path or "/"
    target = f"{path}?{origin.query}" if origin.query else path
    current = request.url.path + (f"?{request.url.query}" if request.url.query else "")
    if request.method == "GET" and target == current:
        return FALLBACK_URL
    return target


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _register_auth_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(NotAuthenticatedError)
    @app.exception_handler(SessionExpiredError)
    async def auth_error_handler(request: Request, exc: BinHubError):
        logger.info(
            f"Auth required on {request.url.path}: {exc.code}",
            extra={"error_code": exc.code, "request_path": request.url.path},
        )
        if wants_json(request):
            return JSONResponse(status_code=exc.http_status, content=exc.to_response())
        sign_out(request)
        if isinstance(exc, SessionExpiredError):
            push_toast(request, exc.toast_message, ToastKind.INFO)
        return _redirect("/login")

    @app.exception_handler(RoleForbiddenError)
    async def role_error_handler(request: Request, exc: RoleForbiddenError):
        logger.warning(
            exc.message,
            extra={
                "error_code": exc.code, "role": exc.role,
                "request_path": request.url.path,
            },
        )
        if wants_json(request):
            return JSONResponse(status_code=exc.http_status, content=exc.to_response())
        return _redirect(home_url(exc.role))


def _register_binhub_error_handler(app: FastAPI) -> None:
    """Register BinHub domain/infrastructure error handler."""

    @app.exception_handler(BinHubError)
    async def binhub_error_handler(request: Request, exc: BinHubError):
        """Handle all BinHub domain/infrastructure errors."""
        logger.error(
            f"BinHubError: {exc.message}",
            extra={"error_code": exc.code, "request_path": request.url.path},
        )
        if wants_json(request):
            return JSONResponse(status_code=exc.http_status, content=exc.to_response())
        push_error(request, exc.toast_message)
        return _redirect(back_url(request))


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        if wants_json(request):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=_build_validation_error_response(exc),
            )
        push_error(request, first_error_message(exc.errors()))
        return _redirect(back_url(request))


def _register_http_error_handler(app: FastAPI) -> None:
    """Unknown routes and framework-raised HTTP errors."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if wants_json(request):
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": {"code": "HTTP_ERROR", "message": str(exc.detail)}},
            )
        user = session_user(request)
        not_found = exc.status_code == status.HTTP_404_NOT_FOUND
        return render(
            request, "error.html",
            status_code=exc.status_code,
            title="Page not found" if not_found else "Request failed",
            message=(
                "The page you are looking for does not exist"
                if not_found else str(exc.detail)
            ),
            back_href=home_url(user.role) if user else "/login",
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        if wants_json(request):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "message": "An unexpected error occurred",
                        "category": ErrorCategory.INTERNAL.value,
                        "severity": ErrorSeverity.CRITICAL.value,
                    },
                },
            )
        user = session_user(request)
        return render(
            request, "error.html",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            title="Something went wrong",
            message="An unexpected error occurred",
            back_href=home_url(user.role) if user else "/login",
        )


def first_error_message(errors) -> str:
    """User-facing text of the first pydantic error ("Value error, " stripped)."""
    if not errors:
        return "Invalid form data"
    first = errors[0]
    message = str(first.get("msg", "Invalid form data"))
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if not loc:
        return message
    label = loc[-1].replace("_", " ").capitalize()
    if first.get("type") == "missing" or first.get("input", "") is None:
        return f"{label} is required"
    return f"{label}: {message}"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": first_error_message(exc.errors()),
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
