"""Product Enforcement: pure field rules for product create and patch.

Invariants:
    - name is non-blank and at most MAX_PRODUCT_NAME_LENGTH chars after strip
    - price is at least MIN_PRICE (strictly positive, two decimal places)
    - category falls back to DEFAULT_CATEGORY when blank or omitted
"""

from decimal import Decimal, ROUND_HALF_UP

from orders_api.core.domain_types import (
    DEFAULT_CATEGORY, MAX_CATEGORY_LENGTH, MAX_PRODUCT_NAME_LENGTH, MIN_PRICE,
)
from orders_api.core.errors import ValidationError
from orders_api.core.records import ProductDraft, ProductPatch

_CENTS = Decimal("0.01")


def normalize_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Product name cannot be empty.", "name")
    if len(name) > MAX_PRODUCT_NAME_LENGTH:
        raise ValidationError(
            f"Product name must be at most {MAX_PRODUCT_NAME_LENGTH} characters.",
            "name",
        )
    return name


def normalize_price(price: Decimal) -> Decimal:
    price = Decimal(price).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if price < MIN_PRICE:
        raise ValidationError("Product price must be greater than zero.", "price")
    return price


def normalize_category(category: str | None) -> str:
    if category is None or not category.strip():
        return DEFAULT_CATEGORY
    category = category.strip()
    if len(category) > MAX_CATEGORY_LENGTH:
        raise ValidationError(
            f"Product category must be at most {MAX_CATEGORY_LENGTH} characters.",
            "category",
        )
    return category


def validate_draft(draft: ProductDraft) -> ProductDraft:
    return ProductDraft(
        name=normalize_name(draft.name),
        price=normalize_price(draft.price),
        description=draft.description,
        category=normalize_category(draft.category),
    )


def validate_patch(patch: ProductPatch) -> ProductPatch:
    """Apply the create rules to supplied fields only."""
    return ProductPatch(
        name=normalize_name(patch.name) if patch.name is not None else None,
        price=normalize_price(patch.price) if patch.price is not None else None,
        description=patch.description,
        category=(
            normalize_category(patch.category)
            if patch.category is not None else None
        ),
    )
