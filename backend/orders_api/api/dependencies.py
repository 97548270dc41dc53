"""Dependency Wiring: builds stores and managers on the request-scoped session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orders_api.infrastructure.database import get_db
from orders_api.infrastructure.order_repository import SqlOrderStore
from orders_api.infrastructure.product_repository import SqlProductStore
from orders_api.services.order_manager import OrderManager
from orders_api.services.product_manager import ProductManager


def get_product_manager(db: AsyncSession = Depends(get_db)) -> ProductManager:
    return ProductManager(SqlProductStore(db))


def get_order_manager(db: AsyncSession = Depends(get_db)) -> OrderManager:
    return OrderManager(SqlOrderStore(db), ProductManager(SqlProductStore(db)))
