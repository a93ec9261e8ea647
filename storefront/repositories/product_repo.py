# storefront/repositories/product_repo.py
from storefront.database import JsonCollection
from storefront.models.product import Product


class ProductRepository:
    """
    Data access layer for the catalog (products.json).

    - Read only, the API never writes products.
    - No FastAPI, no business logic.
    """

    def list(self, collection: JsonCollection) -> list[Product]:
        return [Product.model_validate(row) for row in collection.all()]
