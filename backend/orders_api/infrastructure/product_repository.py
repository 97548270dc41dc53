"""Product Store: SQLAlchemy implementation of the ProductStore protocol.

Invariants:
    - Returns ProductRecord values; ORM objects never leave this module
    - Each write commits before returning
    - A version mismatch on update is rolled back and raised as ConcurrencyError
"""

import logging
from typing import Iterable

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from orders_api.core.domain_types import ProductId
from orders_api.core.errors import ConcurrencyError, ErrorContext
from orders_api.core.records import ProductDraft, ProductPatch, ProductRecord
from orders_api.models.order_item import OrderItem
from orders_api.models.product import Product

logger = logging.getLogger(__name__)


def to_product_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=ProductId(product.id),
        name=product.name,
        price=product.price,
        description=product.description,
        category=product.category,
    )


class SqlProductStore:
    """Product persistence over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, product_id: ProductId) -> Product | None:
        result = await self.db.execute(
            select(Product).where(Product.id == product_id),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[ProductRecord]:
        logger.debug("Querying all products")
        result = await self.db.execute(select(Product).order_by(Product.id))
        return [to_product_record(p) for p in result.scalars().all()]

    async def get(self, product_id: ProductId) -> ProductRecord | None:
        product = await self._load(product_id)
        return to_product_record(product) if product else None

    async def get_many(
        self, product_ids: Iterable[ProductId],
    ) -> dict[ProductId, ProductRecord]:
        ids = set(product_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(Product).where(Product.id.in_(ids)),
        )
        return {
            ProductId(p.id): to_product_record(p)
            for p in result.scalars().all()
        }

    async def exists(self, product_id: ProductId) -> bool:
        result = await self.db.execute(
            select(exists().where(Product.id == product_id)),
        )
        return bool(result.scalar())

    async def is_in_use(self, product_id: ProductId) -> bool:
        result = await self.db.execute(
            select(exists().where(OrderItem.product_id == product_id)),
        )
        return bool(result.scalar())

    async def create(self, draft: ProductDraft) -> ProductRecord:
        product = Product(
            name=draft.name,
            price=draft.price,
            description=draft.description,
            category=draft.category,
        )
        self.db.add(product)
        await self.db.commit()
        logger.info(
            f"Created product {product.id}", extra={"product_id": product.id},
        )
        return to_product_record(product)

    async def update(
        self, product_id: ProductId, patch: ProductPatch,
    ) -> ProductRecord | None:
        product = await self._load(product_id)
        if product is None:
            return None
        for name, value in patch.supplied().items():
            setattr(product, name, value)
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.error(
                f"Concurrent update on product {product_id}: {e}",
                extra={"product_id": product_id},
            )
            raise ConcurrencyError(
                f"Product {product_id} was modified concurrently.",
                ErrorContext(product_id=product_id),
            )
        return to_product_record(product)

    async def delete(self, product_id: ProductId) -> bool:
        result = await self.db.execute(
            delete(Product).where(Product.id == product_id),
        )
        await self.db.commit()
        return result.rowcount > 0
