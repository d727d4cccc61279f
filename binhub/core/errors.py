"""Error Hierarchy — typed, categorized exceptions for all BinHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; API outages (503) are critical
    - to_response() produces the JSON envelope for JSON routes
    - toast_message is the only text ever shown to the browser user

Design Decisions:
    - Single hierarchy with BinHubError base: one global handler catches all
    - ErrorContext as dataclass: observability fields travel with the error, not the logger
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    api_path: str | None = None
    method: str | None = None
    status_code: int | None = None
    user_message: str | None = None


class BinHubError(Exception):
    """Base exception for all BinHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def toast_message(self) -> str:
        """Text shown to the user in an error toast."""
        return self.context.user_message or self.message

    def to_response(self) -> dict:
        """Convert to standardized JSON error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.toast_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "api_path": self.context.api_path,
                    "status_code": self.context.status_code,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class NotAuthenticatedError(BinHubError):
    """No signed-in user in the browser session."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please sign in to continue",
            "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, context, 401,
        )


class SessionExpiredError(BinHubError):
    """The API rejected the stored token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Your session has expired. Please sign in again.",
            "SESSION_EXPIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class RoleForbiddenError(BinHubError):
    """Signed-in user's role may not open this view."""
    def __init__(self, role: str, required: tuple[str, ...], context: ErrorContext | None = None):
        super().__init__(
            f"Role '{role}' cannot access a view restricted to {', '.join(required)}",
            "ROLE_FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.role = role
        self.required = required


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ApiUnavailableError(BinHubError):
    """Marketplace API could not be reached (timeout, connection, protocol)."""
    def __init__(self, message: str, failure_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "The marketplace service is unavailable. Please try again."
        super().__init__(
            f"Marketplace API error ({failure_type}): {message}",
            "API_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.failure_type = failure_type
