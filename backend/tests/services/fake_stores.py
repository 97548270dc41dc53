"""In-memory ProductStore / OrderStore fakes for manager tests.

Each fake records its write calls in `writes` so tests can assert that a
rejected request never reached the store.
"""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

from orders_api.core.records import (
    LineItemRecord, OrderRecord, ProductRecord,
)


class FakeProductStore:

    def __init__(self):
        self.products: dict[int, ProductRecord] = {}
        self.used: set[int] = set()
        self.writes: list[str] = []
        self.fail_next_update: Exception | None = None
        self.vanish_on_failed_update = False
        self._next_id = 1

    def seed(self, name="Widget", price="9.99", **kw) -> ProductRecord:
        record = ProductRecord(
            id=self._next_id, name=name, price=Decimal(price), **kw,
        )
        self.products[record.id] = record
        self._next_id += 1
        return record

    async def list_all(self):
        return [self.products[k] for k in sorted(self.products)]

    async def get(self, product_id):
        return self.products.get(product_id)

    async def get_many(self, product_ids):
        return {
            pid: self.products[pid]
            for pid in set(product_ids) if pid in self.products
        }

    async def exists(self, product_id):
        return product_id in self.products

    async def is_in_use(self, product_id):
        return product_id in self.used

    async def create(self, draft):
        self.writes.append("create")
        record = ProductRecord(
            id=self._next_id, name=draft.name, price=draft.price,
            description=draft.description, category=draft.category,
        )
        self.products[record.id] = record
        self._next_id += 1
        return record

    async def update(self, product_id, patch):
        self.writes.append("update")
        if self.fail_next_update is not None:
            error, self.fail_next_update = self.fail_next_update, None
            if self.vanish_on_failed_update:
                self.products.pop(product_id, None)
            raise error
        if product_id not in self.products:
            return None
        record = replace(self.products[product_id], **patch.supplied())
        self.products[product_id] = record
        return record

    async def delete(self, product_id):
        self.writes.append("delete")
        return self.products.pop(product_id, None) is not None


class FakeOrderStore:

    def __init__(self, products: FakeProductStore):
        self.products = products
        self.orders: dict[int, OrderRecord] = {}
        self.writes: list[str] = []
        self.fail_next_update: Exception | None = None
        self._next_id = 1

    def _items(self, drafts):
        return tuple(
            LineItemRecord(self.products.products[d.product_id], d.quantity)
            for d in drafts
        )

    def _sync_usage(self):
        self.products.used = {
            item.product.id
            for order in self.orders.values() for item in order.items
        }

    async def list_all(self):
        return [self.orders[k] for k in sorted(self.orders)]

    async def get(self, order_id):
        return self.orders.get(order_id)

    async def exists(self, order_id):
        return order_id in self.orders

    async def create(self, draft):
        self.writes.append("create")
        record = OrderRecord(
            id=self._next_id,
            customer_name=draft.customer_name,
            shipping_address=draft.shipping_address,
            order_date=datetime.now(timezone.utc),
            status=draft.status.value,
            items=self._items(draft.items),
        )
        self.orders[record.id] = record
        self._next_id += 1
        self._sync_usage()
        return record

    async def update(self, order_id, fields, items=None):
        self.writes.append("update")
        if self.fail_next_update is not None:
            error, self.fail_next_update = self.fail_next_update, None
            raise error
        if order_id not in self.orders:
            return None
        changes = dict(fields)
        if items is not None:
            changes["items"] = self._items(items)
        record = replace(self.orders[order_id], **changes)
        self.orders[order_id] = record
        self._sync_usage()
        return record

    async def delete(self, order_id):
        self.writes.append("delete")
        removed = self.orders.pop(order_id, None) is not None
        self._sync_usage()
        return removed

    async def add_items(self, order_id, items):
        self.writes.append("add_items")
        order = self.orders[order_id]
        record = replace(order, items=order.items + self._items(items))
        self.orders[order_id] = record
        self._sync_usage()
        return record

    async def remove_items(self, order_id, product_ids):
        self.writes.append("remove_items")
        order = self.orders[order_id]
        record = replace(
            order,
            items=tuple(i for i in order.items if i.product.id not in product_ids),
        )
        self.orders[order_id] = record
        self._sync_usage()
        return record
