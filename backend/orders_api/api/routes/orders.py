"""Order Routes: CRUD and line-item endpoints for /orders.

Invariants:
    - Every order body nests fully resolved products per line item
    - 201 on create, 204 with no body on delete, 200 otherwise
    - remove-items takes its product ids as a JSON array body on DELETE
"""

from fastapi import APIRouter, Body, Depends, Response, status

from orders_api.api.dependencies import get_order_manager
from orders_api.core.domain_types import OrderId, ProductId
from orders_api.core.response_mapper import order_to_response
from orders_api.schemas.order import (
    LineItemIn, OrderCreate, OrderResponse, OrderUpdate,
)
from orders_api.services.order_manager import OrderManager

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(manager: OrderManager = Depends(get_order_manager)):
    return [order_to_response(o) for o in await manager.list_all()]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int, manager: OrderManager = Depends(get_order_manager),
):
    return order_to_response(await manager.get(OrderId(order_id)))


@router.post(
    "", response_model=OrderResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderCreate, manager: OrderManager = Depends(get_order_manager),
):
    return order_to_response(await manager.create(body.to_draft()))


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: int,
    body: OrderUpdate,
    manager: OrderManager = Depends(get_order_manager),
):
    updated = await manager.update(OrderId(order_id), body.to_patch())
    return order_to_response(updated)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: int, manager: OrderManager = Depends(get_order_manager),
):
    await manager.delete(OrderId(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{order_id}/add-items", response_model=OrderResponse)
async def add_items(
    order_id: int,
    items: list[LineItemIn],
    manager: OrderManager = Depends(get_order_manager),
):
    updated = await manager.add_items(
        OrderId(order_id), [item.to_draft() for item in items],
    )
    return order_to_response(updated)


@router.delete("/{order_id}/remove-items", response_model=OrderResponse)
async def remove_items(
    order_id: int,
    product_ids: list[int] = Body(...),
    manager: OrderManager = Depends(get_order_manager),
):
    updated = await manager.remove_items(
        OrderId(order_id), [ProductId(pid) for pid in product_ids],
    )
    return order_to_response(updated)
