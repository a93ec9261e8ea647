"""End-to-end: cart client talking to the API through the test client."""

import pytest
import requests

from storefront.client.api import ApiError, NetworkError, StorefrontApi
from storefront.client.manager import CART_KEY, CartManager
from storefront.client.storage import LocalStorage
from storefront.client.view import TextView


@pytest.fixture
def manager(client, tmp_path):
    api = StorefrontApi("/api", session=client)
    m = CartManager(LocalStorage(tmp_path / "storage.json"), api, TextView(), is_cart_page=True)
    m.bootstrap()
    return m


def test_catalog_loaded(manager):
    assert [p.id for p in manager.state.products] == [1, 2, 3, 4]


def test_client_total_matches_server_total(manager, read_collection):
    manager.add_item(1, 2)
    manager.add_item(4, 3)
    manager.add_item(2, 1)
    client_total = manager.total()

    order_ref = manager.submit_order()

    assert order_ref is not None
    order = read_collection("orders.json")[0]
    assert order["ref"] == order_ref
    assert order["total"] == client_total == 33.7
    assert manager.state.cart == ()
    assert manager.storage.get_item(CART_KEY) is None


def test_server_rejection_keeps_cart(manager, read_collection):
    manager.add_item(3, 2)

    assert manager.submit_order() is None
    assert manager.view.notices[-1] == "Total invalide."
    assert [(l.product_id, l.quantity) for l in manager.state.cart] == [(3, 2)]
    assert read_collection("orders.json") == []


def test_contact_roundtrip(manager, read_collection):
    assert manager.send_contact("Kenji", "k@example.com", "Bonjour") is True
    assert manager.send_contact("Kenji", "", "Bonjour") is False
    assert manager.view.notices[-1] == "Champs requis manquants."
    assert len(read_collection("messages.json")) == 1


class TestStorefrontApi:
    def test_network_failure(self):
        class DownSession:
            def request(self, method, url, **kwargs):
                raise requests.ConnectionError("refused")

        api = StorefrontApi("http://shop.invalid/api", session=DownSession())

        with pytest.raises(NetworkError) as exc:
            api.submit_order({"items": []})
        assert exc.value.message == "Erreur réseau."

    def test_timeout_is_forwarded(self):
        seen = {}

        class RecordingSession:
            def request(self, method, url, **kwargs):
                seen.update(kwargs, url=url)
                raise requests.Timeout("slow")

        api = StorefrontApi("http://shop.invalid/api/", session=RecordingSession(), timeout=2.5)

        with pytest.raises(NetworkError):
            api.fetch_products()
        assert seen["timeout"] == 2.5
        assert seen["url"] == "http://shop.invalid/api/products"

    def test_server_error_message(self, client):
        api = StorefrontApi("/api", session=client)

        with pytest.raises(ApiError) as exc:
            api.submit_order({"items": [{"productId": 42, "quantity": 1}]})
        assert exc.value.status_code == 400
        assert exc.value.message == "Panier vide ou produits inconnus."

    def test_non_json_answer(self):
        class Response:
            status_code = 502

            def json(self):
                raise ValueError("no json")

        class BadGateway:
            def request(self, method, url, **kwargs):
                return Response()

        api = StorefrontApi("http://shop.invalid/api", session=BadGateway())

        with pytest.raises(ApiError) as exc:
            api.submit_order({"items": []})
        assert exc.value.message == "La commande a échoué."
