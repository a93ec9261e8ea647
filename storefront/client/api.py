# storefront/client/api.py
import logging
from typing import Any

import requests

from storefront.models.product import Product

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Erreur réseau."
UNEXPECTED_RESPONSE_MESSAGE = "Réponse API inattendue."
ORDER_FAILED_MESSAGE = "La commande a échoué."
CONTACT_FAILED_MESSAGE = "Impossible d’envoyer le message."


class StorefrontClientError(Exception):
    """Base class for errors surfaced to the shopper."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(StorefrontClientError):
    """The server answered, but reported a failure."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(StorefrontClientError):
    """The request never got a usable answer."""


class StorefrontApi:
    """
    Thin HTTP client for the storefront API.

    Any object with a requests-style `request(method, url, **kwargs)` can
    be passed as `session` (a `requests.Session`, or a FastAPI TestClient
    with `base_url="/api"`).

    No timeout is applied unless one is configured.
    """

    def __init__(
        self,
        base_url: str,
        session: Any = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> tuple[int, Any]:
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise NetworkError(NETWORK_ERROR_MESSAGE) from e

        try:
            data = response.json()
        except ValueError:
            data = None
        return response.status_code, data

    def _post(self, path: str, payload: dict, failure_message: str) -> dict:
        status_code, data = self._request("POST", path, json=payload)
        if status_code >= 400 or not isinstance(data, dict) or not data.get("success"):
            error = data.get("error") if isinstance(data, dict) else None
            raise ApiError(error or failure_message, status_code)
        return data

    def fetch_products(self) -> list[Product]:
        status_code, data = self._request("GET", "/products")
        if status_code >= 400:
            raise ApiError(UNEXPECTED_RESPONSE_MESSAGE, status_code)
        rows = data.get("data") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            return []
        return [Product.model_validate(row) for row in rows]

    def submit_order(self, payload: dict) -> dict:
        """POST /orders; returns {"success", "orderRef", "total", ...}."""
        return self._post("/orders", payload, ORDER_FAILED_MESSAGE)

    def send_contact(self, payload: dict) -> dict:
        return self._post("/contact", payload, CONTACT_FAILED_MESSAGE)
