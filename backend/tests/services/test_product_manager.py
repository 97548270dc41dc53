"""Product Manager: lifecycle rules checked against an in-memory store.

Tests cover:
    - create validates name/price and defaults category
    - update is a merge-patch and maps misses to NotFound
    - concurrency conflicts become NotFound only when the product vanished
    - delete refuses in-use products and leaves them intact
    - resolve names the first missing product
"""

from decimal import Decimal

import pytest

from orders_api.core.errors import (
    ConcurrencyError, ProductInUseError, ResourceNotFoundError, ValidationError,
)
from orders_api.core.records import ProductDraft, ProductPatch
from orders_api.services.product_manager import ProductManager
from tests.services.fake_stores import FakeProductStore


@pytest.fixture
def store():
    return FakeProductStore()


@pytest.fixture
def manager(store):
    return ProductManager(store)


async def test_create_defaults_category_and_rounds_price(manager):
    product = await manager.create(ProductDraft(name="  Lamp ", price=Decimal("12.5")))
    assert product.name == "Lamp"
    assert product.category == "General"
    assert product.price == Decimal("12.50")


async def test_create_rejects_blank_name(manager, store):
    with pytest.raises(ValidationError):
        await manager.create(ProductDraft(name="   ", price=Decimal("1.00")))
    assert store.writes == []


async def test_create_rejects_name_over_200_chars(manager, store):
    with pytest.raises(ValidationError):
        await manager.create(ProductDraft(name="x" * 201, price=Decimal("1.00")))
    assert store.writes == []


@pytest.mark.parametrize("price", ["0", "-3.00", "0.004"])
async def test_create_rejects_non_positive_price(manager, store, price):
    with pytest.raises(ValidationError) as exc:
        await manager.create(ProductDraft(name="Lamp", price=Decimal(price)))
    assert exc.value.field == "price"
    assert store.writes == []


async def test_get_missing_raises_not_found(manager):
    with pytest.raises(ResourceNotFoundError) as exc:
        await manager.get(42)
    assert exc.value.http_status == 404
    assert "42" in exc.value.message


async def test_update_only_touches_supplied_fields(manager, store):
    seeded = store.seed(name="Lamp", price="10.00", description="Desk lamp", category="Home")
    updated = await manager.update(seeded.id, ProductPatch(price=Decimal("11")))
    assert updated.price == Decimal("11.00")
    assert updated.name == "Lamp"
    assert updated.description == "Desk lamp"
    assert updated.category == "Home"


async def test_update_missing_raises_not_found(manager):
    with pytest.raises(ResourceNotFoundError):
        await manager.update(7, ProductPatch(name="New"))


async def test_update_missing_with_invalid_patch_is_not_found(manager, store):
    with pytest.raises(ResourceNotFoundError):
        await manager.update(7, ProductPatch(price=Decimal("0")))
    assert store.writes == []


async def test_update_validates_supplied_fields(manager, store):
    seeded = store.seed()
    with pytest.raises(ValidationError):
        await manager.update(seeded.id, ProductPatch(price=Decimal("0")))
    assert store.writes == []


async def test_update_concurrency_conflict_on_vanished_product_is_not_found(manager, store):
    seeded = store.seed()
    store.fail_next_update = ConcurrencyError("stale")
    store.vanish_on_failed_update = True
    with pytest.raises(ResourceNotFoundError):
        await manager.update(seeded.id, ProductPatch(name="New"))


async def test_update_concurrency_conflict_on_existing_product_is_reraised(manager, store):
    seeded = store.seed()
    store.fail_next_update = ConcurrencyError("stale")
    with pytest.raises(ConcurrencyError):
        await manager.update(seeded.id, ProductPatch(name="New"))


async def test_delete_unused_product(manager, store):
    seeded = store.seed()
    await manager.delete(seeded.id)
    assert seeded.id not in store.products


async def test_delete_in_use_product_is_conflict_and_keeps_product(manager, store):
    seeded = store.seed()
    store.used.add(seeded.id)
    with pytest.raises(ProductInUseError) as exc:
        await manager.delete(seeded.id)
    assert exc.value.http_status == 400
    assert seeded.id in store.products
    assert "delete" not in store.writes


async def test_delete_missing_product_is_not_found(manager, store):
    with pytest.raises(ResourceNotFoundError):
        await manager.delete(3)
    assert store.writes == []


async def test_resolve_returns_every_requested_product(manager, store):
    a = store.seed(name="A")
    b = store.seed(name="B")
    resolved = await manager.resolve([a.id, b.id])
    assert resolved == {a.id: a, b.id: b}


async def test_resolve_names_first_missing_product(manager, store):
    a = store.seed(name="A")
    with pytest.raises(ResourceNotFoundError) as exc:
        await manager.resolve([a.id, 99, 98])
    assert exc.value.resource_id == 99
