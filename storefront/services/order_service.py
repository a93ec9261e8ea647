# storefront/services/order_service.py
import logging
import uuid
from typing import Any

from fastapi import HTTPException, status

from storefront.core.coerce import MAX_QUANTITY, round_money
from storefront.database import JsonCollection
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import (
    AcceptedItem,
    EnrichedLine,
    ItemCandidate,
    OrderCreated,
    OrderDraft,
    OrderSubmission,
    RejectedCandidate,
)

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = "Panier vide ou produits inconnus."
INVALID_TOTAL_MESSAGE = "Total invalide."
CART_KEY_MIGRATION_NOTE = (
    "Ancienne clé cart détectée. Le format attendu est désormais "
    "{ items: [{ productId, quantity }] }."
)


def _catalog_index(products: list[Product]) -> dict[int, Product]:
    # First occurrence wins if the file repeats an id
    index: dict[int, Product] = {}
    for product in products:
        index.setdefault(product.id, product)
    return index


def enrich_candidate(
    candidate: ItemCandidate,
    catalog: dict[int, Product],
) -> EnrichedLine:
    """
    Price a candidate from the catalog.

    Any price sent by the client was already discarded during parsing;
    the unit price always comes from `catalog`.
    """
    product = catalog.get(candidate.product_id)
    if product is None:
        return RejectedCandidate(
            raw=candidate.model_dump(by_alias=True),
            reason="unknown_product",
        )

    return AcceptedItem(
        item=OrderItem(
            product_id=product.id,
            quantity=min(candidate.quantity, MAX_QUANTITY),
            unit_price=product.price,
        )
    )


def normalize_order_payload(body: Any, products: list[Product]) -> OrderDraft:
    """
    Turn an untrusted submission into a priced order draft.

    Steps:
      1. Sanitize customer/notes and parse lines (current or legacy shape).
      2. Match each candidate against the catalog, drop unknown products.
      3. Clamp quantities to MAX_QUANTITY and price from the catalog.
      4. Reject empty results and non-positive totals (400).

    Raises:
        HTTPException(400): no line survived, or total <= 0.
    """
    submission = body if isinstance(body, OrderSubmission) else OrderSubmission.from_raw(body)
    catalog = _catalog_index(products)

    enriched = [enrich_candidate(c, catalog) for c in submission.candidates]
    items = [line.item for line in enriched if isinstance(line, AcceptedItem)]

    rejected = len(submission.lines) - len(items)
    if rejected:
        logger.debug("Dropped %d order line(s) during normalization", rejected)

    if not items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=EMPTY_CART_MESSAGE,
        )

    total = sum(item.quantity * item.unit_price for item in items)
    if total <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_TOTAL_MESSAGE,
        )

    return OrderDraft(
        customer=submission.customer,
        notes=submission.notes,
        items=items,
        total=round_money(total),
    )


def generate_order_ref() -> str:
    """ORD- followed by the first block of a uuid4, e.g. ORD-1A2B3C4D."""
    return f"ORD-{str(uuid.uuid4()).split('-')[0].upper()}"


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Load the authoritative catalog
      - Normalize and price the submission
      - Stamp reference + timestamp and append to the order log
      - Attach the migration notice for legacy payloads
    """

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository):
        self.order_repo = order_repo
        self.product_repo = product_repo

    def place_order(
        self,
        body: Any,
        products: JsonCollection,
        orders: JsonCollection,
    ) -> OrderCreated:
        submission = OrderSubmission.from_raw(body)
        draft = normalize_order_payload(submission, self.product_repo.list(products))

        order = Order(
            ref=generate_order_ref(),
            customer=draft.customer,
            notes=draft.notes,
            items=draft.items,
            total=draft.total,
        )
        self.order_repo.create_order(orders, order)
        logger.info(
            "Order %s recorded: %d item(s), total %.2f",
            order.ref,
            len(order.items),
            order.total,
        )

        return OrderCreated(
            order_ref=order.ref,
            total=order.total,
            message=CART_KEY_MIGRATION_NOTE if submission.legacy_shape else None,
        )
