# storefront/services/product_service.py
from storefront.database import JsonCollection
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductList


class ProductService:
    """
    Business logic for the catalog.

    The catalog is read-only from the API's point of view; prices are
    normalized to numbers on load.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, collection: JsonCollection) -> ProductList:
        return ProductList(data=self.repo.list(collection))
