"""Response Mapper: projects records into wire-shaped dicts.

Invariants:
    - Pure and deterministic: same record in, equal dict out
    - Each line item carries the full product (id, name, description, price,
      category) plus quantity, never a bare product id
    - Line items ordered by product id
"""

from orders_api.core.records import LineItemRecord, OrderRecord, ProductRecord


def product_to_response(product: ProductRecord) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
    }


def line_item_to_response(item: LineItemRecord) -> dict:
    return {**product_to_response(item.product), "quantity": item.quantity}


def order_to_response(order: OrderRecord) -> dict:
    items = sorted(order.items, key=lambda i: i.product.id)
    return {
        "id": order.id,
        "customer_name": order.customer_name,
        "shipping_address": order.shipping_address,
        "order_date": order.order_date,
        "status": order.status,
        "items": [line_item_to_response(i) for i in items],
    }
