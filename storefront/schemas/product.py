# storefront/schemas/product.py
from sqlmodel import SQLModel

from storefront.models.product import Product


class ProductList(SQLModel):
    """
    Catalog response: `{"data": [Product, ...]}`.
    """

    data: list[Product]
