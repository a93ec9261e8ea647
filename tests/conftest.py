"""Pytest fixtures for storefront tests."""

import json

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import get_settings
from storefront.models.product import Product

CATALOG = [
    {"id": 1, "name": "Plateau Tokyo", "description": "12 pièces", "price": 10.0, "image": "/img/1.jpg"},
    {"id": 2, "name": "Maki saumon", "price": 5.0, "image": "/img/2.jpg"},
    {"id": 3, "name": "Thé vert offert", "price": 0, "image": "/img/3.jpg"},
    {"id": 4, "name": "Mochi", "price": "2.90", "image": "/img/4.jpg", "spicy": False},
]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point DATA_DIR at a temporary directory for the duration of a test."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def catalog_file(data_dir):
    path = data_dir / "products.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def products():
    """Catalog as model objects, for pure function tests."""
    return [Product.model_validate(row) for row in CATALOG]


@pytest.fixture
def client(catalog_file):
    from storefront.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def read_collection(data_dir):
    """Load one of the JSON collections written by the API."""

    def _read(name):
        return json.loads((data_dir / name).read_text(encoding="utf-8"))

    return _read
