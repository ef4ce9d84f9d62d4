"""Error Hierarchy: typed, categorized exceptions for all Explore failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No query text or driver messages in user-facing messages

Design Decisions:
    - Single hierarchy with ExploreError base: FastAPI global handler catches all
    - ErrorContext carries the operation and identifiers involved
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Operation and identifiers attached to an error for diagnosis."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    actor_id: str | None = None
    recipient_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ExploreError(Exception):
    """Base exception for all Explore errors."""

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
                "context": {
                    "operation": self.context.operation,
                    "actor_id": self.context.actor_id,
                    "recipient_id": self.context.recipient_id,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidCursorError(ExploreError):
    """Pagination token could not be decoded."""
    def __init__(self, token: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid pagination token",
            "INVALID_PAGINATION_TOKEN", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.token = token


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ExploreError):
    """Storage engine rejected or could not execute the operation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class RequestCancelledError(ExploreError):
    """Deadline expired before the store responded."""
    def __init__(
        self, operation: str, timeout_seconds: float, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Request cancelled: {operation} exceeded {timeout_seconds:g}s deadline",
            "REQUEST_CANCELLED", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, ctx, 504,
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds
