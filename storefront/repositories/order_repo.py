# storefront/repositories/order_repo.py
from storefront.database import JsonCollection
from storefront.models.order import Order


class OrderRepository:
    """Append-only access to orders.json."""

    def create_order(self, collection: JsonCollection, order: Order) -> Order:
        collection.append(order.to_json())
        return order
