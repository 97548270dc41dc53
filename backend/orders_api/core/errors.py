"""Error Hierarchy: typed, categorized exceptions for all Orders API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/404) are recoverable; infrastructure errors (5xx) are critical
    - to_response() produces the REST envelope with a top-level "message"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with OrdersApiError base: one FastAPI handler catches all
    - Conflicts (product in use, duplicate line item) answer 400, matching the
      public status-code contract; ConcurrencyError alone answers 409
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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: int | None = None
    product_id: int | None = None
    debug_info: dict[str, Any] | None = None


class OrdersApiError(Exception):
    """Base exception for all Orders API errors."""

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
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Domain Errors (400/404) ────────────────────────────────────

class ValidationError(OrdersApiError):
    """Input is malformed or violates a business constraint."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None, code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class DuplicateLineItemError(ValidationError):
    """The same product appears more than once in one request."""
    def __init__(self, product_ids: list[int], context: ErrorContext | None = None):
        ids = ", ".join(str(pid) for pid in product_ids)
        super().__init__(
            f"Duplicate product IDs in request: {ids}",
            "items", context, code="DUPLICATE_LINE_ITEM",
        )
        self.product_ids = product_ids


class ResourceNotFoundError(OrdersApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(OrdersApiError):
    """Operation conflicts with current state."""
    def __init__(
        self, message: str, code: str = "CONFLICT",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class ProductInUseError(ConflictError):
    """Product is referenced by at least one line item."""
    def __init__(self, product_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot delete product ID {product_id} as it is used in existing orders.",
            "PRODUCT_IN_USE", context,
        )
        self.product_id = product_id


class LineItemConflictError(ConflictError):
    """Order already has a line item for one of the products being added."""
    def __init__(
        self, order_id: int, product_ids: list[int],
        context: ErrorContext | None = None,
    ):
        ids = ", ".join(str(pid) for pid in product_ids)
        super().__init__(
            f"Order {order_id} already contains product(s): {ids}",
            "LINE_ITEM_EXISTS", context,
        )
        self.order_id = order_id
        self.product_ids = product_ids


# ─── Infrastructure Errors (409/5xx) ────────────────────────────

class ConcurrencyError(OrdersApiError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DatabaseError(OrdersApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
