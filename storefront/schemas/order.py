# storefront/schemas/order.py
from typing import Annotated, Any, Literal, Union

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from storefront.core.coerce import (
    clean_text,
    first_present,
    positive_int,
    positive_quantity,
)
from storefront.models.base import CamelModel
from storefront.models.order import Customer, OrderItem

GUEST_NAME = "Client invité"

CUSTOMER_NAME_MAX = 120
CUSTOMER_EMAIL_MAX = 160
CUSTOMER_PHONE_MAX = 32
NOTES_MAX = 240


class ItemCandidate(CamelModel):
    """
    A raw line that passed coercion and still has to be matched
    against the catalog.
    """

    kind: Literal["candidate"] = "candidate"
    product_id: int = Field(gt=0)
    quantity: int | float
    legacy: bool = False


class AcceptedItem(CamelModel):
    """Candidate that matched a catalog product and was priced."""

    kind: Literal["accepted"] = "accepted"
    item: OrderItem


class RejectedCandidate(CamelModel):
    """
    Raw line that will not appear in the order.

    reason:
      - "not_an_object"      : line is not a JSON object
      - "invalid_product_id" : productId is not a positive integer
      - "unknown_product"    : productId is not in the catalog
    """

    kind: Literal["rejected"] = "rejected"
    raw: Any = None
    reason: Literal["not_an_object", "invalid_product_id", "unknown_product"]


ParsedLine = Annotated[
    Union[ItemCandidate, RejectedCandidate],
    PydanticField(discriminator="kind"),
]
EnrichedLine = Annotated[
    Union[AcceptedItem, RejectedCandidate],
    PydanticField(discriminator="kind"),
]


def _parse_line(raw: Any, legacy: bool) -> ItemCandidate | RejectedCandidate:
    if not isinstance(raw, dict):
        return RejectedCandidate(raw=raw, reason="not_an_object")

    # Legacy lines use id/qty; current lines use productId/quantity.
    if legacy:
        product_id = positive_int(first_present(raw, "id", "productId"))
        quantity = first_present(raw, "qty", "quantity", default=1)
    else:
        product_id = positive_int(first_present(raw, "productId", "id"))
        quantity = first_present(raw, "quantity", "qty", default=1)

    if product_id is None:
        return RejectedCandidate(raw=raw, reason="invalid_product_id")

    return ItemCandidate(
        product_id=product_id,
        quantity=positive_quantity(quantity),
        legacy=legacy,
    )


class OrderSubmission(SQLModel):
    """
    Untrusted order payload after sanitizing.

    Accepted shapes:
      - current: {"items": [{"productId": 1, "quantity": 2}], "customer": {...}, "notes": "..."}
      - legacy : {"cart": [{"id": 1, "qty": 2}]}

    `items` wins when both are present. Duplicate product ids are kept
    as separate lines, in input order.
    """

    customer: Customer
    notes: str | None = None
    lines: list[ParsedLine] = []

    # True when only the legacy `cart` key was sent
    legacy_shape: bool = False

    @classmethod
    def from_raw(cls, body: Any) -> "OrderSubmission":
        if not isinstance(body, dict):
            body = {}

        raw_customer = body.get("customer")
        if not isinstance(raw_customer, dict):
            raw_customer = {}

        customer = Customer(
            name=clean_text(raw_customer.get("name"), CUSTOMER_NAME_MAX) or GUEST_NAME,
            email=clean_text(raw_customer.get("email"), CUSTOMER_EMAIL_MAX),
            phone=clean_text(raw_customer.get("phone"), CUSTOMER_PHONE_MAX),
        )

        items = body.get("items")
        cart = body.get("cart")
        if isinstance(items, list):
            lines = [_parse_line(raw, legacy=False) for raw in items]
        elif isinstance(cart, list):
            lines = [_parse_line(raw, legacy=True) for raw in cart]
        else:
            lines = []

        return cls(
            customer=customer,
            notes=clean_text(body.get("notes"), NOTES_MAX),
            lines=lines,
            legacy_shape=isinstance(cart, list) and not isinstance(items, list),
        )

    @property
    def candidates(self) -> list[ItemCandidate]:
        return [line for line in self.lines if isinstance(line, ItemCandidate)]


class OrderDraft(CamelModel):
    """
    Priced, validated order content, ready to be stamped with
    a reference and a timestamp.
    """

    customer: Customer
    notes: str | None = None
    items: list[OrderItem]
    total: float


class OrderCreated(CamelModel):
    """
    Response for a successful checkout.

    `message` is only present when the legacy `cart` key was used.
    """

    success: Literal[True] = True
    order_ref: str
    total: float
    message: str | None = None
