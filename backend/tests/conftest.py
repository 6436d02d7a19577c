"""Shared fixtures for product manager tests."""

from datetime import date

import pytest

from product_manager.core.config import Settings
from product_manager.models.product import Category, Product, ProductDraft
from product_manager.services.notifications import NotificationCenter
from product_manager.services.product_manager import ProductManager
from product_manager.storage.blob_store import MemoryBlobStore
from product_manager.storage.product_repository import ProductRepository

TODAY = date(2024, 6, 15)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMillis:
    """Millisecond clock that stays put unless told to move."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now


def make_product(product_id: int = 1, **overrides) -> Product:
    fields = {
        "id": product_id,
        "name": f"Product {product_id}",
        "description": "A sturdy product description text",
        "price": 25000.0,
        "category": Category.ELECTRONICS,
        "release_date": date(2023, 1, 1),
        "stock": 10,
        "is_active": True,
    }
    fields.update(overrides)
    return Product(**fields)


def valid_draft(**overrides) -> ProductDraft:
    fields = {
        "name": "Kursi",
        "description": "Kursi kayu buatan tangan lokal",
        "price": 150000,
        "category": "Pakaian",
        "release_date": "2023-01-01",
        "stock": 10,
        "is_active": True,
    }
    fields.update(overrides)
    return ProductDraft(**fields)


@pytest.fixture
def settings():
    return Settings(storage_backend="memory", notification_ttl_seconds=3.0)


@pytest.fixture
def store():
    return MemoryBlobStore()


@pytest.fixture
def repository(store):
    return ProductRepository(store, key="products")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def millis():
    return FakeMillis()


@pytest.fixture
def notifier(clock):
    return NotificationCenter(ttl_seconds=3.0, clock=clock)


@pytest.fixture
def manager(repository, notifier, millis):
    return ProductManager(
        repository,
        notifier,
        today=lambda: TODAY,
        clock_ms=millis,
    )
