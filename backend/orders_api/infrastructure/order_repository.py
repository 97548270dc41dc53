"""Order Store: SQLAlchemy implementation of the OrderStore protocol.

Invariants:
    - Every order read eager-loads items and their products (selectinload)
    - Returns OrderRecord values; ORM objects never leave this module
    - Order row and line items are written in one commit (all or nothing)
    - Delete removes line items and the order row in the same transaction,
      without relying on the FK cascade
    - Any change to line items bumps the order version, so item writes are
      covered by the same optimistic check as field writes
    - A version mismatch or a line-item key collision at commit is rolled
      back and raised as ConcurrencyError

Design Decisions:
    - Item replacement diffs the loaded collection (update in place, drop,
      insert) so a composite key is never deleted and re-inserted in one flush
    - Reads after a write use populate_existing so the returned record reflects
      the committed rows, including freshly attached products
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from orders_api.core.domain_types import OrderId, ProductId
from orders_api.core.errors import ConcurrencyError, ErrorContext
from orders_api.core.records import (
    LineItemDraft, LineItemRecord, OrderDraft, OrderRecord,
)
from orders_api.infrastructure.product_repository import to_product_record
from orders_api.models.order import Order
from orders_api.models.order_item import OrderItem

logger = logging.getLogger(__name__)


def to_order_record(order: Order) -> OrderRecord:
    return OrderRecord(
        id=OrderId(order.id),
        customer_name=order.customer_name,
        shipping_address=order.shipping_address,
        order_date=_as_utc(order.order_date),
        status=order.status,
        items=tuple(
            LineItemRecord(
                product=to_product_record(item.product),
                quantity=item.quantity,
            )
            for item in order.items
        ),
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _with_details():
    return select(Order).options(
        selectinload(Order.items).selectinload(OrderItem.product),
    )


class SqlOrderStore:
    """Order persistence over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, order_id: OrderId, fresh: bool = False) -> Order | None:
        query = _with_details().where(Order.id == order_id)
        if fresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _reload_record(self, order_id: OrderId) -> OrderRecord:
        order = await self._load(order_id, fresh=True)
        return to_order_record(order)

    async def _commit(self, order_id: OrderId) -> None:
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.error(
                f"Concurrent update on order {order_id}: {e}",
                extra={"order_id": order_id},
            )
            raise ConcurrencyError(
                f"Order {order_id} was modified concurrently.",
                ErrorContext(order_id=order_id),
            )
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                f"Line item collision on order {order_id}: {e}",
                extra={"order_id": order_id},
            )
            raise ConcurrencyError(
                f"Line items of order {order_id} were modified concurrently.",
                ErrorContext(order_id=order_id),
            )

    async def list_all(self) -> list[OrderRecord]:
        logger.debug("Querying all orders with details")
        result = await self.db.execute(_with_details().order_by(Order.id))
        return [to_order_record(o) for o in result.scalars().all()]

    async def get(self, order_id: OrderId) -> OrderRecord | None:
        logger.debug(
            f"Querying order {order_id} with details",
            extra={"order_id": order_id},
        )
        order = await self._load(order_id)
        return to_order_record(order) if order else None

    async def exists(self, order_id: OrderId) -> bool:
        result = await self.db.execute(
            select(exists().where(Order.id == order_id)),
        )
        return bool(result.scalar())

    async def create(self, draft: OrderDraft) -> OrderRecord:
        order = Order(
            customer_name=draft.customer_name,
            shipping_address=draft.shipping_address,
            status=draft.status.value,
            items=[
                OrderItem(product_id=item.product_id, quantity=item.quantity)
                for item in draft.items
            ],
        )
        self.db.add(order)
        await self.db.commit()
        logger.info(
            f"Created order {order.id} with {len(draft.items)} item(s)",
            extra={"order_id": order.id, "item_count": len(draft.items)},
        )
        return await self._reload_record(OrderId(order.id))

    async def update(
        self,
        order_id: OrderId,
        fields: dict,
        items: list[LineItemDraft] | None = None,
    ) -> OrderRecord | None:
        order = await self._load(order_id)
        if order is None:
            return None
        for name, value in fields.items():
            setattr(order, name, value)
        if items is not None:
            _replace_items(order, items)
            _touch(order)
        await self._commit(order_id)
        return await self._reload_record(order_id)

    async def delete(self, order_id: OrderId) -> bool:
        await self.db.execute(
            delete(OrderItem).where(OrderItem.order_id == order_id),
        )
        result = await self.db.execute(
            delete(Order).where(Order.id == order_id),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def add_items(
        self, order_id: OrderId, items: list[LineItemDraft],
    ) -> OrderRecord | None:
        order = await self._load(order_id)
        if order is None:
            return None
        for item in items:
            order.items.append(
                OrderItem(product_id=item.product_id, quantity=item.quantity),
            )
        _touch(order)
        await self._commit(order_id)
        return await self._reload_record(order_id)

    async def remove_items(
        self, order_id: OrderId, product_ids: list[ProductId],
    ) -> OrderRecord | None:
        order = await self._load(order_id)
        if order is None:
            return None
        doomed = set(product_ids)
        order.items = [i for i in order.items if i.product_id not in doomed]
        _touch(order)
        await self._commit(order_id)
        return await self._reload_record(order_id)


def _touch(order: Order) -> None:
    # Collection changes alone do not UPDATE the orders row
    flag_modified(order, "status")


def _replace_items(order: Order, items: list[LineItemDraft]) -> None:
    """Make order.items match items exactly, reusing rows for kept products."""
    wanted = {item.product_id: item.quantity for item in items}
    kept: list[OrderItem] = []
    for existing in order.items:
        if existing.product_id in wanted:
            existing.quantity = wanted.pop(existing.product_id)
            kept.append(existing)
    for product_id, quantity in wanted.items():
        kept.append(OrderItem(product_id=product_id, quantity=quantity))
    order.items = kept
