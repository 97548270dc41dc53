"""ORM Models: SQLAlchemy declarative models for products, orders and line items.

Invariants:
    - All models inherit from Base (db/base.py)
    - Order is the aggregate root for its line items; Product is referenced, not owned

Design Decisions:
    - One file per entity
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from orders_api.models.product import Product  # noqa: F401
from orders_api.models.order import Order  # noqa: F401
from orders_api.models.order_item import OrderItem  # noqa: F401
