# storefront/client/manager.py
import logging
from typing import Literal

from sqlmodel import SQLModel

from storefront.client import cart as carts
from storefront.client.api import StorefrontApi, StorefrontClientError
from storefront.client.cart import Cart
from storefront.client.config import ClientSettings, get_client_settings
from storefront.client.storage import LocalStorage
from storefront.client.view import TextView
from storefront.models.product import Product

logger = logging.getLogger(__name__)

CART_KEY = "sushii_cart_v2"
LEGACY_CART_KEY = "sushii_cart"
COOKIE_KEY = "sushii_cookies"

CookieChoice = Literal["accepted", "rejected"]


class CartState(SQLModel):
    """
    Everything the page knows: catalog, cart, and whether the full
    cart listing is on screen.
    """

    products: list[Product] = []
    cart: Cart = ()
    is_cart_page: bool = False


class CartManager:
    """
    Owns the client state and keeps storage and view in sync with it.

    Responsibilities:
      - load the cart from storage, migrating the legacy key
      - apply pure cart transitions and persist the whole cart each time
      - re-render cart count (and cart listing on the cart page)
      - submit orders / contact messages with a guarded submit control
      - remember the cookie consent choice
    """

    def __init__(
        self,
        storage: LocalStorage,
        api: StorefrontApi,
        view: TextView | None = None,
        is_cart_page: bool = False,
    ):
        self.storage = storage
        self.api = api
        self.view = view or TextView()
        self.state = CartState(is_cart_page=is_cart_page)

    # ---- persistence ----

    def _migrate_legacy_cart(self) -> Cart | None:
        legacy = self.storage.read(LEGACY_CART_KEY, None)
        if legacy is None:
            return None
        migrated = carts.parse_cart(legacy, legacy=True) if isinstance(legacy, list) else ()
        if migrated:
            self.storage.write(CART_KEY, [line.to_json() for line in migrated])
        self.storage.remove(LEGACY_CART_KEY)
        logger.info("Migrated %d legacy cart line(s)", len(migrated))
        return migrated

    def load(self) -> Cart:
        """
        Read the cart from storage.

        Falls back to the legacy key when the current one is absent;
        the legacy key is always gone afterwards.
        """
        stored = self.storage.read(CART_KEY, None)
        if isinstance(stored, list):
            cart = carts.parse_cart(stored)
        else:
            cart = self._migrate_legacy_cart() or ()
        self.state = self.state.model_copy(update={"cart": cart})
        return cart

    def _save(self, cart: Cart) -> None:
        self.storage.write(CART_KEY, [line.to_json() for line in cart])
        self.state = self.state.model_copy(update={"cart": cart})
        self.render_cart_count()
        if self.state.is_cart_page:
            self.render_cart_page()

    # ---- rendering ----

    def entries(self) -> list[carts.CartEntry]:
        return carts.cart_with_product_details(self.state.cart, self.state.products)

    def total(self) -> float:
        return carts.cart_total(self.entries())

    def render_cart_count(self) -> None:
        self.view.render_cart_count(carts.cart_count(self.state.cart))

    def render_cart_page(self) -> None:
        entries = self.entries()
        self.view.render_cart(entries, carts.cart_total(entries))

    # ---- catalog ----

    def fetch_products(self) -> list[Product]:
        try:
            products = self.api.fetch_products()
        except (StorefrontClientError, ValueError) as e:
            logger.error("Cannot load products: %s", e)
            self.view.render_products_error()
            return self.state.products
        self.state = self.state.model_copy(update={"products": products})
        self.view.render_products(products)
        return products

    # ---- cart operations ----

    def add_item(self, product_id: int, quantity: int = 1) -> bool:
        product = carts.find_product(self.state.products, product_id)
        if product is None:
            self.view.alert("Ce produit n'est plus disponible.")
            return False
        self._save(carts.add_item(self.state.cart, product_id, quantity))
        self.view.flash(f"{product.name} ajouté au panier.")
        return True

    def change_quantity(self, product_id: int, delta: int) -> None:
        self._save(carts.change_quantity(self.state.cart, product_id, delta))

    def remove_item(self, product_id: int) -> None:
        product = carts.find_product(self.state.products, product_id)
        self._save(carts.remove_item(self.state.cart, product_id))
        if product is not None:
            self.view.flash(f"{product.name} retiré du panier.")

    def submit_order(self) -> str | None:
        """
        Send the cart as an order.

        Returns the order reference on success. On failure the cart is
        left untouched and the error is shown.
        """
        if not self.state.cart:
            self.view.alert("Ton panier est vide.")
            return None

        with self.view.checkout_button.busy():
            try:
                result = self.api.submit_order(carts.order_payload(self.entries()))
            except StorefrontClientError as e:
                logger.error("Order failed: %s", e.message)
                self.view.alert(e.message)
                return None

            self.storage.remove(CART_KEY)
            self.state = self.state.model_copy(update={"cart": ()})
            self.render_cart_count()
            if self.state.is_cart_page:
                self.render_cart_page()
            order_ref = result.get("orderRef")
            self.view.alert(f"Commande enregistrée ! Référence : {order_ref}.")
            return order_ref

    # ---- contact form ----

    def send_contact(self, name: str, email: str, message: str) -> bool:
        with self.view.contact_button.busy():
            try:
                self.api.send_contact({"name": name, "email": email, "message": message})
            except StorefrontClientError as e:
                logger.error("Contact failed: %s", e.message)
                self.view.alert(e.message)
                return False
        self.view.flash("Merci ! Nous te répondons sous 24h.")
        return True

    # ---- cookie consent ----

    def cookie_consent(self) -> CookieChoice | None:
        current = self.storage.read(COOKIE_KEY, None)
        if current in ("accepted", "rejected"):
            return current
        return None

    def init_cookie_banner(self) -> None:
        self.view.cookie_banner_hidden = self.cookie_consent() is not None

    def accept_cookies(self) -> None:
        self.storage.write(COOKIE_KEY, "accepted")
        self.view.cookie_banner_hidden = True
        self.view.flash("Merci ! Cookies activés.")

    def reject_cookies(self) -> None:
        self.storage.write(COOKIE_KEY, "rejected")
        self.view.cookie_banner_hidden = True
        self.view.flash("Cookies désactivés.")

    # ---- page load ----

    def bootstrap(self) -> None:
        """Load cart, render what we can, then fetch the catalog."""
        self.load()
        self.init_cookie_banner()
        self.render_cart_count()
        if self.state.is_cart_page:
            self.render_cart_page()
        self.fetch_products()
        if self.state.is_cart_page:
            self.render_cart_page()


def create_manager(settings: ClientSettings | None = None, is_cart_page: bool = False) -> CartManager:
    """Build a manager wired to the configured API and storage file."""
    settings = settings or get_client_settings()
    api = StorefrontApi(settings.API_BASE, timeout=settings.TIMEOUT)
    return CartManager(LocalStorage(settings.STORAGE_PATH), api, is_cart_page=is_cart_page)
