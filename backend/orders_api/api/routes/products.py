"""Product Routes: CRUD endpoints for /products.

Invariants:
    - 201 on create, 204 with no body on delete, 200 otherwise
    - Errors are raised by ProductManager and translated by api/error_handlers.py
"""

from fastapi import APIRouter, Depends, Response, status

from orders_api.api.dependencies import get_product_manager
from orders_api.core.domain_types import ProductId
from orders_api.core.response_mapper import product_to_response
from orders_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from orders_api.services.product_manager import ProductManager

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(manager: ProductManager = Depends(get_product_manager)):
    return [product_to_response(p) for p in await manager.list_all()]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int, manager: ProductManager = Depends(get_product_manager),
):
    return product_to_response(await manager.get(ProductId(product_id)))


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate, manager: ProductManager = Depends(get_product_manager),
):
    return product_to_response(await manager.create(body.to_draft()))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    body: ProductUpdate,
    manager: ProductManager = Depends(get_product_manager),
):
    updated = await manager.update(ProductId(product_id), body.to_patch())
    return product_to_response(updated)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int, manager: ProductManager = Depends(get_product_manager),
):
    await manager.delete(ProductId(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
