"""Records: plain data passed between the persistence gateway and the managers.

Invariants:
    - Records are frozen; managers never mutate what the gateway returns
    - OrderRecord.items always carries a resolved ProductRecord per line item
    - Patch fields set to None mean "not supplied" and are left untouched

Design Decisions:
    - Dataclasses instead of ORM objects so no lazy load can escape the gateway
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from orders_api.core.domain_types import (
    OrderId, ProductId, OrderStatus, DEFAULT_CATEGORY,
)


@dataclass(frozen=True)
class ProductRecord:
    id: ProductId
    name: str
    price: Decimal
    description: str | None = None
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True)
class LineItemRecord:
    product: ProductRecord
    quantity: int


@dataclass(frozen=True)
class OrderRecord:
    id: OrderId
    customer_name: str
    shipping_address: str
    order_date: datetime
    status: str
    items: tuple[LineItemRecord, ...] = ()

    def product_ids(self) -> set[ProductId]:
        return {item.product.id for item in self.items}


@dataclass(frozen=True)
class LineItemDraft:
    """A requested (product, quantity) pair, not yet validated."""
    product_id: ProductId
    quantity: int


@dataclass(frozen=True)
class ProductDraft:
    name: str
    price: Decimal
    description: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class ProductPatch:
    """Merge-patch for a product.

    name: replaced when supplied.
    price: replaced when supplied.
    description: replaced when supplied; cannot be cleared through a patch.
    category: replaced when supplied.
    """
    name: str | None = None
    price: Decimal | None = None
    description: str | None = None
    category: str | None = None

    def supplied(self) -> dict:
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass(frozen=True)
class OrderDraft:
    customer_name: str
    shipping_address: str
    items: list[LineItemDraft] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING


@dataclass(frozen=True)
class OrderPatch:
    """Merge-patch for an order.

    customer_name, shipping_address, status: replaced when supplied.
    items: when supplied, wholesale-replaces the line-item set (not merged).
    """
    customer_name: str | None = None
    shipping_address: str | None = None
    status: OrderStatus | None = None
    items: list[LineItemDraft] | None = None

    def supplied_fields(self) -> dict:
        """Scalar fields to overwrite; items are handled separately."""
        values = {
            "customer_name": self.customer_name,
            "shipping_address": self.shipping_address,
            "status": self.status.value if self.status else None,
        }
        return {k: v for k, v in values.items() if v is not None}
