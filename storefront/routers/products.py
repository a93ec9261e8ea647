# storefront/routers/products.py
from fastapi import APIRouter, Depends

from storefront.database import JsonCollection, get_products_collection
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductList
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=ProductList)
def list_products(products: JsonCollection = Depends(get_products_collection)):
    """
    List the catalog.

    - Public endpoint.
    - Response shape: {"data": [...]}
    """
    return service.list_products(products)
