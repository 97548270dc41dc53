"""Order Manager: order lifecycle and line-item consistency.

Invariants:
    - Every line item written references a product resolved through ProductManager
    - Item checks run in a fixed order: existence, quantity, duplicates, emptiness
    - A failed check means no store write happens
    - update is a merge-patch; a supplied items list replaces the whole set
    - add_items rejects products already on the order (no quantity merge)
    - remove_items is all-or-nothing

Design Decisions:
    - Managers return records; routes project them through core/response_mapper.py
"""

import logging

from orders_api.core.domain_types import OrderId, ProductId
from orders_api.core.enforce_line_items import (
    check_not_on_order, check_removable, validate_line_items,
)
from orders_api.core.errors import (
    ConcurrencyError, ErrorContext, ResourceNotFoundError,
)
from orders_api.core.records import (
    LineItemDraft, OrderDraft, OrderPatch, OrderRecord,
)
from orders_api.core.repository_protocols import OrderStore
from orders_api.services.product_manager import ProductManager

logger = logging.getLogger(__name__)


def _not_found(order_id: OrderId) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Order", order_id, ErrorContext(order_id=order_id),
    )


class OrderManager:
    """Order use cases over an OrderStore, consulting ProductManager for items."""

    def __init__(self, store: OrderStore, products: ProductManager):
        self.store = store
        self.products = products

    async def _check_items(self, items: list[LineItemDraft]) -> None:
        await self.products.resolve(item.product_id for item in items)
        validate_line_items(items)

    async def _get_or_404(self, order_id: OrderId, action: str) -> OrderRecord:
        order = await self.store.get(order_id)
        if order is None:
            logger.warning(
                f"Order {order_id} not found for {action}",
                extra={"order_id": order_id},
            )
            raise _not_found(order_id)
        return order

    async def list_all(self) -> list[OrderRecord]:
        logger.info("Fetching all orders")
        return await self.store.list_all()

    async def get(self, order_id: OrderId) -> OrderRecord:
        logger.info(f"Fetching order {order_id}", extra={"order_id": order_id})
        return await self._get_or_404(order_id, "read")

    async def create(self, draft: OrderDraft) -> OrderRecord:
        logger.info(f"Creating order for customer: {draft.customer_name}")
        await self._check_items(draft.items)
        order = await self.store.create(draft)
        logger.info(
            f"Created order {order.id} for customer {order.customer_name}",
            extra={"order_id": order.id, "item_count": len(order.items)},
        )
        return order

    async def update(self, order_id: OrderId, patch: OrderPatch) -> OrderRecord:
        logger.info(f"Updating order {order_id}", extra={"order_id": order_id})
        if not await self.store.exists(order_id):
            logger.warning(
                f"Order {order_id} not found for update",
                extra={"order_id": order_id},
            )
            raise _not_found(order_id)
        if patch.items is not None:
            await self._check_items(patch.items)
        try:
            updated = await self.store.update(
                order_id, patch.supplied_fields(), patch.items,
            )
        except ConcurrencyError:
            if not await self.store.exists(order_id):
                logger.warning(
                    f"Order {order_id} no longer exists after concurrency conflict",
                    extra={"order_id": order_id},
                )
                raise _not_found(order_id)
            raise
        if updated is None:
            raise _not_found(order_id)
        return updated

    async def delete(self, order_id: OrderId) -> None:
        """Delete the order and all of its line items."""
        logger.info(f"Deleting order {order_id}", extra={"order_id": order_id})
        if not await self.store.delete(order_id):
            logger.warning(
                f"Order {order_id} not found for deletion",
                extra={"order_id": order_id},
            )
            raise _not_found(order_id)
        logger.info(f"Deleted order {order_id}", extra={"order_id": order_id})

    async def add_items(
        self, order_id: OrderId, items: list[LineItemDraft],
    ) -> OrderRecord:
        logger.info(
            f"Adding {len(items)} item(s) to order {order_id}",
            extra={"order_id": order_id, "item_count": len(items)},
        )
        order = await self._get_or_404(order_id, "adding items")
        await self._check_items(items)
        check_not_on_order(order, items)
        updated = await self.store.add_items(order_id, items)
        if updated is None:
            raise _not_found(order_id)
        return updated

    async def remove_items(
        self, order_id: OrderId, product_ids: list[ProductId],
    ) -> OrderRecord:
        logger.info(
            f"Removing {len(product_ids)} item(s) from order {order_id}",
            extra={"order_id": order_id, "item_count": len(product_ids)},
        )
        order = await self._get_or_404(order_id, "removing items")
        check_removable(order, product_ids)
        updated = await self.store.remove_items(order_id, product_ids)
        if updated is None:
            raise _not_found(order_id)
        return updated
