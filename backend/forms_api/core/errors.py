"""Error Hierarchy: typed, categorized exceptions for infrastructure failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Business outcomes are ServiceResponse values (core/service_response.py);
      these exceptions describe faults raised by collaborators such as the database
    - Single hierarchy with FormsApiError base: one global handler catches all
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DATABASE = "database"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Context attached to an error for logs, never for clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    form_id: str | None = None


class FormsApiError(Exception):
    """Base exception for all service errors."""

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

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "form_id": self.context.form_id,
        }


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FormsApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class IntegrityConstraintError(DatabaseError):
    """A write violated a unique, foreign-key or not-null constraint."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(message, operation, context)
        self.code = "INTEGRITY_CONSTRAINT"
        self.category = ErrorCategory.CONFLICT
        self.severity = ErrorSeverity.ERROR
        self.http_status = 409
