"""Error Hierarchy - typed, categorized exceptions for every API failure mode.

Invariants:
    - Every HTTP-facing error has a code (str), category, severity and http_status
    - Client errors (400-level) carry a descriptive message; infrastructure
      errors (500-level) carry a generic one
    - to_response() never includes driver messages, SQL or connection details

Design Decisions:
    - Single hierarchy with ApiError base: the global handler catches all of it
    - StartupError sits outside ApiError: it never reaches a request, only the
      process entry point
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    UNAVAILABLE = "unavailable"
    DATABASE = "database"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs. Not sent to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    record_kind: str | None = None


class ApiError(Exception):
    """Base exception for all errors surfaced through the HTTP layer."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class PayloadValidationError(ApiError):
    """Request body failed validation for its record kind."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        if self.details:
            response["error"]["details"] = self.details
        return response


class OriginNotAllowedError(ApiError):
    """Cross-origin request from an origin outside the allow-list."""
    def __init__(self, origin: str, context: ErrorContext | None = None):
        super().__init__(
            f"Origin '{origin}' is not allowed",
            "CORS_ORIGIN_REJECTED", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )
        self.origin = origin


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ServiceNotReadyError(ApiError):
    """Persistence layer has not been verified reachable yet."""
    def __init__(self, state: str, context: ErrorContext | None = None):
        super().__init__(
            "Service is not ready to accept submissions",
            "SERVICE_NOT_READY", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.WARNING, context, 503,
        )
        self.state = state


class DatabaseError(ApiError):
    """Database operation failed. The cause stays in the logs."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Internal error",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


# ─── Process Errors ─────────────────────────────────────────────

class StartupError(Exception):
    """Database unreachable during the startup readiness probe."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
