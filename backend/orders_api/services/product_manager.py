"""Product Manager: product lifecycle and the in-use delete guard.

Invariants:
    - Create/patch inputs pass core/enforce_product.py before reaching the store
    - A product referenced by any line item is never deleted (ProductInUseError)
    - update is a merge-patch: unsupplied fields keep their stored values
    - update checks existence before validating the patch (404 before 400)
    - A concurrency conflict becomes NotFound if the product vanished,
      otherwise it propagates
"""

import logging
from typing import Iterable

from orders_api.core.domain_types import ProductId
from orders_api.core.enforce_line_items import find_missing_products
from orders_api.core.enforce_product import validate_draft, validate_patch
from orders_api.core.errors import (
    ConcurrencyError, ErrorContext, ProductInUseError, ResourceNotFoundError,
)
from orders_api.core.records import ProductDraft, ProductPatch, ProductRecord
from orders_api.core.repository_protocols import ProductStore

logger = logging.getLogger(__name__)


def _not_found(product_id: ProductId) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Product", product_id, ErrorContext(product_id=product_id),
    )


class ProductManager:
    """Product use cases over a ProductStore."""

    def __init__(self, store: ProductStore):
        self.store = store

    async def list_all(self) -> list[ProductRecord]:
        logger.info("Fetching all products")
        return await self.store.list_all()

    async def get(self, product_id: ProductId) -> ProductRecord:
        logger.info(
            f"Fetching product {product_id}", extra={"product_id": product_id},
        )
        product = await self.store.get(product_id)
        if product is None:
            logger.warning(
                f"Product {product_id} not found",
                extra={"product_id": product_id},
            )
            raise _not_found(product_id)
        return product

    async def resolve(
        self, product_ids: Iterable[ProductId],
    ) -> dict[ProductId, ProductRecord]:
        """Load every requested product or fail on the first missing one."""
        requested = list(product_ids)
        found = await self.store.get_many(requested)
        missing = find_missing_products(requested, found)
        if missing:
            logger.warning(
                f"Product {missing[0]} not found while resolving line items",
                extra={"product_id": missing[0]},
            )
            raise _not_found(missing[0])
        return found

    async def create(self, draft: ProductDraft) -> ProductRecord:
        draft = validate_draft(draft)
        logger.info(f"Creating product: {draft.name}")
        return await self.store.create(draft)

    async def update(
        self, product_id: ProductId, patch: ProductPatch,
    ) -> ProductRecord:
        logger.info(
            f"Updating product {product_id}", extra={"product_id": product_id},
        )
        if not await self.store.exists(product_id):
            logger.warning(
                f"Product {product_id} not found for update",
                extra={"product_id": product_id},
            )
            raise _not_found(product_id)
        patch = validate_patch(patch)
        try:
            updated = await self.store.update(product_id, patch)
        except ConcurrencyError:
            if not await self.store.exists(product_id):
                logger.warning(
                    f"Product {product_id} no longer exists after concurrency conflict",
                    extra={"product_id": product_id},
                )
                raise _not_found(product_id)
            raise
        if updated is None:
            logger.warning(
                f"Product {product_id} not found for update",
                extra={"product_id": product_id},
            )
            raise _not_found(product_id)
        return updated

    async def delete(self, product_id: ProductId) -> None:
        logger.info(
            f"Deleting product {product_id}", extra={"product_id": product_id},
        )
        if not await self.store.exists(product_id):
            logger.warning(
                f"Product {product_id} not found for deletion",
                extra={"product_id": product_id},
            )
            raise _not_found(product_id)
        if await self.store.is_in_use(product_id):
            logger.warning(
                f"Refusing to delete product {product_id}: used in orders",
                extra={"product_id": product_id, "error_code": "PRODUCT_IN_USE"},
            )
            raise ProductInUseError(product_id, ErrorContext(product_id=product_id))
        if not await self.store.delete(product_id):
            raise _not_found(product_id)
        logger.info(
            f"Deleted product {product_id}", extra={"product_id": product_id},
        )
