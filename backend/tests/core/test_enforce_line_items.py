"""Line-Item Enforcement: tests for pure item rules.

Tests cover:
    - find_missing_products keeps request order and drops repeats
    - quantity, duplicate and emptiness checks (and their order)
    - check_not_on_order rejects products already on the order
    - check_removable requires every id to be present
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from orders_api.core.enforce_line_items import (
    check_no_duplicates,
    check_not_empty,
    check_not_on_order,
    check_quantities,
    check_removable,
    find_duplicates,
    find_missing_products,
    validate_line_items,
)
from orders_api.core.errors import (
    DuplicateLineItemError, LineItemConflictError, ResourceNotFoundError,
    ValidationError,
)
from orders_api.core.records import (
    LineItemDraft, LineItemRecord, OrderRecord, ProductRecord,
)


def _order(*product_ids):
    return OrderRecord(
        id=1,
        customer_name="Ada",
        shipping_address="1 Analytical Way",
        order_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
        status="Pending",
        items=tuple(
            LineItemRecord(ProductRecord(pid, f"P{pid}", Decimal("1.00")), 1)
            for pid in product_ids
        ),
    )


# ─── find_missing_products ───────────────────────────────────────

def test_find_missing_products_keeps_request_order():
    assert find_missing_products([5, 1, 9, 5, 7], found=[1, 7]) == [5, 9]


def test_find_missing_products_empty_when_all_found():
    assert find_missing_products([1, 2], found={1: "a", 2: "b"}) == []


# ─── quantity / duplicates / emptiness ───────────────────────────

def test_check_quantities_accepts_one():
    check_quantities([LineItemDraft(1, 1)])


@pytest.mark.parametrize("quantity", [0, -5])
def test_check_quantities_rejects_non_positive(quantity):
    with pytest.raises(ValidationError) as exc:
        check_quantities([LineItemDraft(1, 2), LineItemDraft(3, quantity)])
    assert exc.value.field == "quantity"
    assert exc.value.context.product_id == 3


def test_find_duplicates_sorted():
    assert find_duplicates([4, 2, 4, 2, 1]) == [2, 4]


def test_check_no_duplicates_rejects_repeated_product():
    with pytest.raises(DuplicateLineItemError) as exc:
        check_no_duplicates([LineItemDraft(2, 1), LineItemDraft(2, 1)])
    assert exc.value.http_status == 400
    assert exc.value.code == "DUPLICATE_LINE_ITEM"


def test_check_not_empty():
    with pytest.raises(ValidationError, match="at least one item"):
        check_not_empty([])


def test_validate_line_items_checks_quantity_before_duplicates():
    items = [LineItemDraft(1, 0), LineItemDraft(1, 0)]
    with pytest.raises(ValidationError) as exc:
        validate_line_items(items)
    assert not isinstance(exc.value, DuplicateLineItemError)


# ─── add / remove guards ─────────────────────────────────────────

def test_check_not_on_order_allows_new_products():
    check_not_on_order(_order(1, 2), [LineItemDraft(3, 1)])


def test_check_not_on_order_reports_every_clash():
    with pytest.raises(LineItemConflictError) as exc:
        check_not_on_order(
            _order(1, 2), [LineItemDraft(2, 1), LineItemDraft(1, 1), LineItemDraft(3, 1)],
        )
    assert exc.value.product_ids == [1, 2]
    assert exc.value.http_status == 400


def test_check_removable_accepts_present_ids():
    check_removable(_order(1, 2), [2])


def test_check_removable_rejects_absent_id():
    with pytest.raises(ResourceNotFoundError) as exc:
        check_removable(_order(1, 2), [1, 3])
    assert exc.value.resource_id == 3


def test_check_removable_rejects_empty_request():
    with pytest.raises(ValidationError):
        check_removable(_order(1), [])


def test_check_removable_rejects_repeated_ids():
    with pytest.raises(DuplicateLineItemError):
        check_removable(_order(1), [1, 1])
