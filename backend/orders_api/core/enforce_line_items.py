"""Line-Item Enforcement: pure rules for the items of an order.

Invariants:
    - Pure functions: no IO, no async, raise typed errors from core/errors.py
    - Quantities below MIN_QUANTITY are rejected
    - A product appears at most once per order (request or stored set)
    - add/remove are all-or-nothing: one bad entry rejects the whole request
"""

from collections import Counter
from typing import Iterable

from orders_api.core.domain_types import ProductId, MIN_QUANTITY
from orders_api.core.errors import (
    DuplicateLineItemError, ErrorContext, LineItemConflictError,
    ResourceNotFoundError, ValidationError,
)
from orders_api.core.records import LineItemDraft, OrderRecord


def find_missing_products(
    requested: Iterable[ProductId], found: Iterable[ProductId],
) -> list[ProductId]:
    """Requested ids absent from found, in request order, without repeats."""
    known = set(found)
    missing: list[ProductId] = []
    for product_id in requested:
        if product_id not in known and product_id not in missing:
            missing.append(product_id)
    return missing


def check_quantities(items: list[LineItemDraft]) -> None:
    for item in items:
        if item.quantity < MIN_QUANTITY:
            raise ValidationError(
                f"Quantity for product {item.product_id} must be at least "
                f"{MIN_QUANTITY} (got {item.quantity}).",
                "quantity",
                ErrorContext(product_id=item.product_id),
            )


def find_duplicates(product_ids: Iterable[ProductId]) -> list[ProductId]:
    counts = Counter(product_ids)
    return sorted(pid for pid, n in counts.items() if n > 1)


def check_no_duplicates(items: list[LineItemDraft]) -> None:
    duplicates = find_duplicates(item.product_id for item in items)
    if duplicates:
        raise DuplicateLineItemError(duplicates)


def check_not_empty(items: list[LineItemDraft]) -> None:
    if not items:
        raise ValidationError(
            "Order must contain at least one item.", "items",
        )


def validate_line_items(items: list[LineItemDraft]) -> None:
    """Quantity, duplicate and emptiness checks, in that order.

    Product existence is checked before this by the caller, since it
    needs the product store.
    """
    check_quantities(items)
    check_no_duplicates(items)
    check_not_empty(items)


def check_not_on_order(order: OrderRecord, items: list[LineItemDraft]) -> None:
    """Reject adding a product the order already holds (no quantity merge)."""
    present = order.product_ids()
    clashes = sorted({item.product_id for item in items} & present)
    if clashes:
        raise LineItemConflictError(
            order.id, clashes, ErrorContext(order_id=order.id),
        )


def check_removable(order: OrderRecord, product_ids: list[ProductId]) -> None:
    """Every id must name a distinct line item currently on the order."""
    if not product_ids:
        raise ValidationError(
            "At least one product ID is required.", "product_ids",
            ErrorContext(order_id=order.id),
        )
    duplicates = find_duplicates(product_ids)
    if duplicates:
        raise DuplicateLineItemError(duplicates, ErrorContext(order_id=order.id))
    present = order.product_ids()
    for product_id in product_ids:
        if product_id not in present:
            raise ResourceNotFoundError(
                "Line item for product",
                product_id,
                ErrorContext(order_id=order.id, product_id=product_id),
            )

