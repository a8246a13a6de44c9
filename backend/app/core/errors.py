"""Error Hierarchy: typed, categorized exceptions for every expense tracker failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable by resubmitting; store errors are not
    - to_response() exposes only a generic message, never the code or internal detail

Design Decisions:
    - Single hierarchy with ExpenseTrackerError base: one global handler catches all
      (ADR: uniform error shape)
    - code/category/severity kept for server-side logs only: clients see {"error": msg}
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Server-side context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ExpenseTrackerError(Exception):
    """Base exception for all expense tracker errors."""

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
        """Convert to the client-facing error body."""
        return {"error": self.message}


# ─── Store Errors ───────────────────────────────────────────────

class DatabaseError(ExpenseTrackerError):
    """A store operation failed after the health gate passed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class DatabaseUnavailableError(ExpenseTrackerError):
    """The health probe failed; the requested operation was not attempted."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Database connection not established",
            "DATABASE_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.ERROR, context, 503,
        )


class PoolExhaustedError(ExpenseTrackerError):
    """No pool slot could be obtained within the configured queue bound or timeout."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"reason": reason}
        super().__init__(
            "Database connection not established",
            "POOL_EXHAUSTED", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.WARNING, ctx, 503,
        )
        self.reason = reason
