# storefront/routers/orders.py
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from storefront.database import (
    JsonCollection,
    get_orders_collection,
    get_products_collection,
)
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.order import OrderCreated
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, product_repo)


@router.post(
    "",
    response_model=OrderCreated,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_order(
    body: Any = Body(default=None),
    products: JsonCollection = Depends(get_products_collection),
    orders: JsonCollection = Depends(get_orders_collection),
):
    """
    Checkout.

    Body is read as-is (untrusted) and normalized by the service:
      - current shape: {"items": [{"productId", "quantity"}], "customer", "notes"}
      - legacy shape : {"cart": [{"id", "qty"}]}

    Prices are always taken from the catalog.
    """
    return service.place_order(body, products, orders)
