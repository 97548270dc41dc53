"""Product ORM: catalogue entry referenced by order line items.

Invariants:
    - id is an autoincrement integer primary key
    - price is Numeric(18, 2)
    - category defaults to "General"
    - version is the optimistic-concurrency counter (version_id_col)

Design Decisions:
    - line_items is view-only: deleting a product never touches line items;
      the in-use check lives in ProductManager
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orders_api.core.domain_types import (
    DEFAULT_CATEGORY, MAX_CATEGORY_LENGTH, MAX_PRODUCT_NAME_LENGTH,
)
from orders_api.db.base import Base


class Product(Base):
    """Product entity."""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(MAX_PRODUCT_NAME_LENGTH), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    category: Mapped[str] = mapped_column(
        String(MAX_CATEGORY_LENGTH), nullable=False, default=DEFAULT_CATEGORY,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    line_items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", viewonly=True, lazy="raise",
    )

    __mapper_args__ = {"version_id_col": version}
