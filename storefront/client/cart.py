# storefront/client/cart.py
"""
Pure cart transitions.

A cart is an immutable tuple of `CartLine`; every function returns a new
tuple and never touches storage or the view. Invariants kept by every
transition:

  - at most one line per product id
  - 1 <= quantity <= 25
"""
from typing import Any, Iterable

from pydantic import ConfigDict
from sqlmodel import Field

from storefront.core.coerce import (
    MAX_QUANTITY,
    clamp_quantity,
    first_present,
    positive_int,
    positive_quantity,
    round_money,
)
from storefront.models.base import CamelModel
from storefront.models.product import Product


class CartLine(CamelModel):
    """One product in the cart, stored as {"productId", "quantity"}."""

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(gt=0)
    quantity: int


class CartEntry(CamelModel):
    """Cart line joined with its catalog product, for display and totals."""

    product_id: int
    quantity: int
    product: Product
    line_total: float


Cart = tuple[CartLine, ...]


def find_product(products: Iterable[Product], product_id: int) -> Product | None:
    for product in products:
        if product.id == product_id:
            return product
    return None


def add_item(cart: Cart, product_id: int, quantity: int = 1) -> Cart:
    """
    Add `quantity` of a product.

    An existing line grows, capped at MAX_QUANTITY even when it was already
    at the cap; otherwise a new line is appended with a clamped quantity.
    """
    if any(line.product_id == product_id for line in cart):
        return tuple(
            line.model_copy(update={"quantity": min(line.quantity + quantity, MAX_QUANTITY)})
            if line.product_id == product_id
            else line
            for line in cart
        )
    return cart + (CartLine(product_id=product_id, quantity=clamp_quantity(quantity)),)


def change_quantity(cart: Cart, product_id: int, delta: int) -> Cart:
    """
    Apply `delta` and clamp to [1, 25].

    Lines are never removed by a decrement: the floor of 1 applies before
    the non-positive filter, which therefore never drops anything.
    """
    updated = (
        line.model_copy(update={"quantity": clamp_quantity(line.quantity + delta)})
        if line.product_id == product_id
        else line
        for line in cart
    )
    return tuple(line for line in updated if line.quantity > 0)


def remove_item(cart: Cart, product_id: int) -> Cart:
    return tuple(line for line in cart if line.product_id != product_id)


def _line_from_raw(raw: Any, legacy: bool) -> CartLine | None:
    if not isinstance(raw, dict):
        return None
    if legacy:
        product_id = positive_int(first_present(raw, "id", "productId"))
        quantity = first_present(raw, "qty", "quantity", default=1)
    else:
        product_id = positive_int(first_present(raw, "productId", "id"))
        quantity = first_present(raw, "quantity", "qty", default=1)
    if product_id is None:
        return None
    return CartLine(
        product_id=product_id,
        quantity=clamp_quantity(int(positive_quantity(quantity))),
    )


def parse_cart(raw: list[Any], legacy: bool = False) -> Cart:
    """
    Rebuild a cart from stored JSON.

    Lines without a positive integer product id are dropped; quantities
    are coerced into [1, 25]. Repeated ids are merged into the first
    line for that id, summing quantities under the same cap.
    """
    merged: dict[int, int] = {}
    for item in raw:
        line = _line_from_raw(item, legacy)
        if line is None:
            continue
        merged[line.product_id] = clamp_quantity(merged.get(line.product_id, 0) + line.quantity)
    return tuple(
        CartLine(product_id=product_id, quantity=quantity)
        for product_id, quantity in merged.items()
    )


def cart_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart)


def cart_with_product_details(cart: Cart, products: Iterable[Product]) -> list[CartEntry]:
    """Join lines with the catalog; lines for unknown products are left out."""
    products = list(products)
    entries: list[CartEntry] = []
    for line in cart:
        product = find_product(products, line.product_id)
        if product is None:
            continue
        entries.append(
            CartEntry(
                product_id=line.product_id,
                quantity=line.quantity,
                product=product,
                line_total=line.quantity * product.price,
            )
        )
    return entries


def cart_total(entries: Iterable[CartEntry]) -> float:
    return round_money(sum(entry.line_total for entry in entries))


def order_payload(entries: Iterable[CartEntry]) -> dict[str, list[dict[str, int]]]:
    """Wire payload for POST /orders. Prices are never sent."""
    return {
        "items": [
            {"productId": entry.product_id, "quantity": entry.quantity}
            for entry in entries
        ]
    }
