"""Order Schemas: wire names, aliases and conversion into records."""

import pytest
from pydantic import ValidationError

from orders_api.core.domain_types import OrderStatus
from orders_api.core.records import LineItemDraft
from orders_api.schemas.order import OrderCreate, OrderUpdate


def test_order_create_reads_camel_case():
    body = OrderCreate.model_validate({
        "customerName": " Ada ",
        "shippingAddress": "1 Analytical Way",
        "items": [{"productId": 1, "quantity": 2}],
    })
    draft = body.to_draft()
    assert draft.customer_name == "Ada"
    assert draft.status is OrderStatus.PENDING
    assert draft.items == [LineItemDraft(1, 2)]


def test_order_create_rejects_blank_customer():
    with pytest.raises(ValidationError):
        OrderCreate.model_validate({
            "customerName": "   ", "shippingAddress": "x", "items": [],
        })


def test_order_create_keeps_bad_quantity_for_manager():
    body = OrderCreate.model_validate({
        "customerName": "Ada", "shippingAddress": "x",
        "items": [{"productId": 1, "quantity": 0}],
    })
    assert body.to_draft().items[0].quantity == 0


def test_order_update_unset_fields_stay_none():
    patch = OrderUpdate.model_validate({"status": "Delivered"}).to_patch()
    assert patch.status is OrderStatus.DELIVERED
    assert patch.customer_name is None
    assert patch.items is None
    assert patch.supplied_fields() == {"status": "Delivered"}


def test_order_update_empty_items_is_supplied():
    patch = OrderUpdate.model_validate({"items": []}).to_patch()
    assert patch.items == []


def test_order_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        OrderUpdate.model_validate({"status": "Lost"})
