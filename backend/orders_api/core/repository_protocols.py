"""Boundary Protocols: contracts between the managers and the persistence gateway.

Invariants:
    - Managers depend only on these protocols, never on AsyncSession or ORM models
    - Stores return records from core/records.py, or None for a miss
    - Multi-row writes are atomic inside one store call
    - Concurrent-update detection surfaces as ConcurrencyError

Design Decisions:
    - Protocol over ABC: structural subtyping, so test fakes need no base class
    - One narrow protocol per aggregate instead of a shared context object
"""

from typing import Iterable, Protocol

from orders_api.core.domain_types import OrderId, ProductId
from orders_api.core.records import (
    LineItemDraft, OrderDraft, OrderRecord, ProductDraft, ProductPatch,
    ProductRecord,
)


class ProductStore(Protocol):
    """Contract for product persistence."""
    async def list_all(self) -> list[ProductRecord]: ...
    async def get(self, product_id: ProductId) -> ProductRecord | None: ...
    async def get_many(
        self, product_ids: Iterable[ProductId],
    ) -> dict[ProductId, ProductRecord]: ...
    async def exists(self, product_id: ProductId) -> bool: ...
    async def create(self, draft: ProductDraft) -> ProductRecord: ...
    async def update(
        self, product_id: ProductId, patch: ProductPatch,
    ) -> ProductRecord | None: ...
    async def delete(self, product_id: ProductId) -> bool: ...
    async def is_in_use(self, product_id: ProductId) -> bool: ...


class OrderStore(Protocol):
    """Contract for order and line-item persistence."""
    async def list_all(self) -> list[OrderRecord]: ...
    async def get(self, order_id: OrderId) -> OrderRecord | None: ...
    async def exists(self, order_id: OrderId) -> bool: ...
    async def create(self, draft: OrderDraft) -> OrderRecord: ...
    async def update(
        self,
        order_id: OrderId,
        fields: dict,
        items: list[LineItemDraft] | None = None,
    ) -> OrderRecord | None: ...
    async def delete(self, order_id: OrderId) -> bool: ...
    async def add_items(
        self, order_id: OrderId, items: list[LineItemDraft],
    ) -> OrderRecord | None: ...
    async def remove_items(
        self, order_id: OrderId, product_ids: list[ProductId],
    ) -> OrderRecord | None: ...
