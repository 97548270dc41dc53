"""Order ORM: aggregate root owning its line items.

Invariants:
    - id is an autoincrement integer primary key
    - order_date is UTC, set once at creation
    - status is one of OrderStatus values, default "Pending"
    - items are deleted with the order (delete-orphan + ON DELETE CASCADE)
    - version is the optimistic-concurrency counter (version_id_col)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orders_api.core.domain_types import OrderStatus
from orders_api.db.base import Base


class Order(Base):
    """Order entity."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    shipping_address: Mapped[str] = mapped_column(Text, nullable=False)
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}
