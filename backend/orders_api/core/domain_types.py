"""Domain Types: identity types, enums and limits shared across the codebase.

Invariants:
    - OrderId / ProductId wrap ints; never pass bare ints across the gateway boundary
    - OrderStatus values are the exact strings stored in orders.status
    - MIN_QUANTITY is 1: zero and negative quantities never reach the database
"""

from decimal import Decimal
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OrderId = NewType("OrderId", int)
ProductId = NewType("ProductId", int)


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states. Transitions are not enforced."""
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


# ─── Limits & Defaults ───────────────────────────────────────────

MAX_PRODUCT_NAME_LENGTH = 200
MAX_CATEGORY_LENGTH = 100
DEFAULT_CATEGORY = "General"
MIN_PRICE = Decimal("0.01")
MIN_QUANTITY = 1
