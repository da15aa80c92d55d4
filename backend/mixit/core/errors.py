"""Error Hierarchy — typed, categorized exceptions for all Mixit failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error is scoped to one requested combination, never process-wide
    - Oracle transport and validation failures are distinct kinds
    - to_response() produces a uniform envelope for the UI layer

Design Decisions:
    - Single hierarchy with MixitError base: callers catch one type and branch on code
    - ErrorContext as dataclass: carries owner/pair/attempt without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    owner_id: str | None = None
    pair_key: str | None = None
    attempt: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class MixitError(Exception):
    """Base exception for all Mixit errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.retryable = retryable

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "owner_id": self.context.owner_id,
                    "pair_key": self.context.pair_key,
                    "attempt": self.context.attempt,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class ResourceNotFoundError(MixitError):
    """Requested element or combination does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class CombinationConflictError(MixitError):
    """A concurrent writer already inserted the same row (unique key race)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "COMBINATION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context,
        )


# ─── Oracle Errors ──────────────────────────────────────────────

class OracleTransportError(MixitError):
    """Oracle unreachable, timed out, or rejected the call."""
    def __init__(
        self,
        message: str,
        transport_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        if ctx.user_message is None:
            ctx.user_message = "Network issue while mixing. Please try again."
        super().__init__(
            f"Oracle transport error ({transport_error_type}): {message}",
            "ORACLE_TRANSPORT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, retryable=True,
        )
        self.transport_error_type = transport_error_type


class OracleValidationError(MixitError):
    """Oracle answered, but the answer is malformed or out of bounds."""
    def __init__(
        self, message: str, raw: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "The mix didn't work. Try again."
        super().__init__(
            f"Oracle response invalid: {message}",
            "ORACLE_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, retryable=True,
        )
        self.raw = raw


# ─── Infrastructure Errors ──────────────────────────────────────

class StoreUnavailableError(MixitError):
    """Database operation failed; fatal to the current request only."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
