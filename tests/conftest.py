import os
import tempfile

# must be set before inventory_api.config is imported
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="inventory-tests-"), "test.db"
)
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["RESET_DB"] = "false"

import pytest
from fastapi.testclient import TestClient

from inventory_api.db import SessionLocal, init_db
from inventory_api.main import app
from inventory_api.services.catalogue_service import CatalogueService
from inventory_api.services.product_service import ProductService


class InMemoryProductRepository:
    """Dict-backed stand-in for ProductRepository."""

    def __init__(self):
        self.rows = {}
        self._next_id = 1

    def get_active(self, product_id):
        p = self.rows.get(product_id)
        return p if p is not None and p.is_active else None

    def search(self, query):
        items = [p for p in self.rows.values() if p.is_active]
        if query.category:
            items = [p for p in items if p.category.lower() == query.category.lower()]
        if query.search:
            term = query.search.lower()
            items = [
                p
                for p in items
                if term in p.name.lower()
                or (p.description is not None and term in p.description.lower())
            ]
        total = len(items)
        items.sort(key=lambda p: p.id)
        # list.sort is stable in both directions, so id order survives ties
        items.sort(key=lambda p: getattr(p, query.sort_field), reverse=query.descending)
        return items[query.offset:query.offset + query.limit], total

    def list_low_stock(self, threshold):
        return sorted(
            (p for p in self.rows.values() if p.is_active and p.stock_quantity < threshold),
            key=lambda p: p.id,
        )

    def add(self, product):
        product.id = self._next_id
        self._next_id += 1
        self.rows[product.id] = product
        return product

    def save(self, product):
        self.rows[product.id] = product
        return product


@pytest.fixture
def repo():
    return InMemoryProductRepository()


@pytest.fixture
def product_service(repo):
    return ProductService(repo)


@pytest.fixture
def catalogue_service(repo):
    return CatalogueService(repo)


@pytest.fixture
def db():
    init_db(reset=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    init_db(reset=True)
    return TestClient(app)
