"""Error Hierarchy - typed, categorized exceptions for all device API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) carry the rule's message verbatim to the client
    - Infrastructure errors (500-level) never expose driver details in the response
    - to_response() produces the uniform {timestamp, status, error, message} envelope

Design Decisions:
    - Single hierarchy with DeviceApiError base: one global handler catches all
    - ErrorContext as dataclass: carries timestamp and device_id for logging
      without coupling to the logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    device_id: int | None = None
    debug_info: dict[str, Any] | None = None


def build_error_body(
    http_status: int, message: str, timestamp: datetime | None = None,
) -> dict:
    """Uniform error envelope shared by domain, validation and catch-all handlers."""
    ts = timestamp or datetime.now(timezone.utc)
    return {
        "timestamp": ts.isoformat(),
        "status": http_status,
        "error": HTTPStatus(http_status).phrase,
        "message": message,
    }


class DeviceApiError(Exception):
    """Base exception for all device API errors."""

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
        return build_error_body(
            self.http_status, self.message, self.context.timestamp,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class DeviceNotFoundError(DeviceApiError):
    """No device stored under the requested id."""
    def __init__(self, device_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.device_id = device_id
        super().__init__(
            f"Device not found with id: {device_id}",
            "DEVICE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.device_id = device_id


class InvalidDeviceOperationError(DeviceApiError):
    """Mutation or deletion rejected by the device's current state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_DEVICE_OPERATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidArgumentError(DeviceApiError):
    """Required filter argument missing or empty."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DeviceApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return build_error_body(
            self.http_status, "Unexpected server error", self.context.timestamp,
        )
