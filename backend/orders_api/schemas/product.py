"""Product Schemas: request and response bodies for /products.

Invariants:
    - ProductUpdate fields are all optional (merge-patch)
    - price is a Decimal in Python and a JSON number on the wire
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from orders_api.core.domain_types import MAX_CATEGORY_LENGTH
from orders_api.core.records import ProductDraft, ProductPatch


JsonPrice = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]


class WireModel(BaseModel):
    """Base for all wire schemas: camelCase aliases, snake_case accepted."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreate(WireModel):
    name: str
    price: Decimal
    description: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=MAX_CATEGORY_LENGTH)

    def to_draft(self) -> ProductDraft:
        return ProductDraft(
            name=self.name, price=self.price,
            description=self.description, category=self.category,
        )


class ProductUpdate(WireModel):
    name: str | None = None
    price: Decimal | None = None
    description: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=MAX_CATEGORY_LENGTH)

    def to_patch(self) -> ProductPatch:
        return ProductPatch(
            name=self.name, price=self.price,
            description=self.description, category=self.category,
        )


class ProductResponse(WireModel):
    id: int
    name: str
    description: str | None = None
    price: JsonPrice
    category: str
