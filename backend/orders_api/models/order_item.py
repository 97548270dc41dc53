"""OrderItem ORM: line item joining one order to one product with a quantity.

Invariants:
    - Composite primary key (order_id, product_id): one line per product per order
    - quantity >= 1 (CHECK constraint backs the application rule)
    - order FK cascades on delete; product FK does not
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orders_api.db.base import Base


class OrderItem(Base):
    """Line item of an order."""
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
    )

    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True,
    )
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id"), primary_key=True, index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
    product: Mapped["Product"] = relationship("Product", lazy="selectin")
