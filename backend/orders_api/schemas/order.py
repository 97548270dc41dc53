"""Order Schemas: request and response bodies for /orders.

Invariants:
    - customerName and shippingAddress are stripped and non-empty when supplied
    - OrderCreate.items also accepts the legacy "products" key
    - OrderUpdate fields are all optional; a supplied items list replaces the set
    - Quantity and duplicate rules are not checked here (OrderManager owns them)
"""

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from orders_api.core.domain_types import OrderStatus, ProductId
from orders_api.core.records import LineItemDraft, OrderDraft, OrderPatch
from orders_api.schemas.product import ProductResponse, WireModel


def _strip_required(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


class LineItemIn(WireModel):
    product_id: int
    quantity: int

    def to_draft(self) -> LineItemDraft:
        return LineItemDraft(ProductId(self.product_id), self.quantity)


class OrderCreate(WireModel):
    customer_name: str = Field(max_length=200)
    shipping_address: str
    status: OrderStatus = OrderStatus.PENDING
    items: list[LineItemIn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("items", "products"),
    )

    @field_validator("customer_name", "shipping_address")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    def to_draft(self) -> OrderDraft:
        return OrderDraft(
            customer_name=self.customer_name,
            shipping_address=self.shipping_address,
            items=[item.to_draft() for item in self.items],
            status=self.status,
        )


class OrderUpdate(WireModel):
    customer_name: str | None = Field(None, max_length=200)
    shipping_address: str | None = None
    status: OrderStatus | None = None
    items: list[LineItemIn] | None = Field(
        None, validation_alias=AliasChoices("items", "products"),
    )

    @field_validator("customer_name", "shipping_address")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip_required(v)

    def to_patch(self) -> OrderPatch:
        return OrderPatch(
            customer_name=self.customer_name,
            shipping_address=self.shipping_address,
            status=self.status,
            items=(
                [item.to_draft() for item in self.items]
                if self.items is not None else None
            ),
        )


class LineItemResponse(ProductResponse):
    quantity: int


class OrderResponse(WireModel):
    id: int
    customer_name: str
    shipping_address: str
    order_date: datetime
    status: str
    items: list[LineItemResponse]
