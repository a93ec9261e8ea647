# storefront/models/order.py
from datetime import datetime, timezone

from pydantic import field_serializer
from sqlmodel import Field

from storefront.models.base import CamelModel, iso_millis


class Customer(CamelModel):
    """
    Sanitized customer block.

    Only `name` is always present ("Client invité" for guests).
    """

    name: str
    email: str | None = None
    phone: str | None = None


class OrderItem(CamelModel):
    """
    Line item inside an order.

    `unit_price` is copied from the catalog at submission time,
    never from the request.
    """

    product_id: int = Field(gt=0)
    quantity: int | float
    unit_price: float = Field(ge=0)


class Order(CamelModel):
    """
    Customer order, as appended to orders.json.

    Records are immutable once written.
    """

    ref: str = Field(description="Human readable reference, e.g. ORD-1A2B3C4D")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    customer: Customer
    notes: str | None = None
    items: list[OrderItem]

    # sum(quantity * unit_price), rounded to cents
    total: float

    @field_serializer("created_at", when_used="json")
    def _created_at_millis(self, value: datetime) -> str:
        return iso_millis(value)
