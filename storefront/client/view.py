# storefront/client/view.py
from contextlib import contextmanager
from typing import Iterator, Literal

from storefront.client.cart import CartEntry
from storefront.models.product import Product

BUSY_LABEL = "Envoi..."

EMPTY_CATALOG_TEXT = "Aucun produit disponible pour le moment. Merci de revenir plus tard."
CATALOG_ERROR_TEXT = "Impossible de récupérer le menu. Vérifie ta connexion et réessaie."
EMPTY_CART_TEXT = "Ton panier est vide pour le moment. Ajoute quelques plats !"


def format_price(amount: float) -> str:
    return f"{amount:.2f} €"


class SubmitControl:
    """
    A submit button: idle -> submitting -> idle.

    `busy()` disables the control for the duration of a request and
    restores it on every exit path, including exceptions.
    """

    def __init__(self, idle_label: str):
        self.idle_label = idle_label
        self.label = idle_label
        self.disabled = False

    @property
    def state(self) -> Literal["idle", "submitting"]:
        return "submitting" if self.disabled else "idle"

    @contextmanager
    def busy(self) -> Iterator["SubmitControl"]:
        self.disabled = True
        self.label = BUSY_LABEL
        try:
            yield self
        finally:
            self.disabled = False
            self.label = self.idle_label


class TextView:
    """
    Plain-text rendering of the storefront widgets.

    Each render call replaces the previous output of its widget, the way
    the page regions are re-rendered in place. Alerts accumulate in
    `notices`; `feedback` holds the last flash message.
    """

    def __init__(self):
        self.cart_count = "0"
        self.cart_count_label = "0 article(s) dans le panier"
        self.products = ""
        self.cart_items = ""
        self.cart_total = format_price(0)
        self.feedback: str | None = None
        self.notices: list[str] = []
        self.cookie_banner_hidden = True

        self.checkout_button = SubmitControl("Passer la commande")
        self.contact_button = SubmitControl("Envoyer")

    def alert(self, message: str) -> None:
        self.notices.append(message)

    def flash(self, message: str) -> None:
        self.feedback = message

    def render_cart_count(self, count: int) -> None:
        self.cart_count = str(count)
        self.cart_count_label = f"{count} article(s) dans le panier"

    def render_products(self, products: list[Product]) -> None:
        if not products:
            self.products = EMPTY_CATALOG_TEXT
            return
        self.products = "\n".join(
            f"[{p.id}] {p.name} - {format_price(p.price)}"
            + (f"\n    {p.description}" if p.description else "")
            for p in products
        )

    def render_products_error(self) -> None:
        self.products = CATALOG_ERROR_TEXT

    def render_cart(self, entries: list[CartEntry], total: float) -> None:
        if not entries:
            self.cart_items = EMPTY_CART_TEXT
            self.cart_total = format_price(0)
            return
        self.cart_items = "\n".join(
            f"{e.product.name} x{e.quantity} "
            f"({format_price(e.product.price)} / pièce) = {format_price(e.line_total)}"
            for e in entries
        )
        self.cart_total = format_price(total)
