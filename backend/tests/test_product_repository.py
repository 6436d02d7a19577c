"""Tests for snapshot persistence and the blob store backends."""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from product_manager.core.config import Settings
from product_manager.models.product import Category
from product_manager.storage.blob_store import (
    FileBlobStore,
    MemoryBlobStore,
    PersistenceError,
    RedisBlobStore,
    create_blob_store,
)
from product_manager.storage.product_repository import (
    ProductRepository,
    serialize_products,
)

from conftest import make_product


class TestProductRepository:
    def test_missing_key_loads_empty_list(self, repository):
        assert repository.load() == []

    def test_round_trip_preserves_records_and_order(self, repository):
        products = [
            make_product(3, category=Category.FOOD, price=12.5, is_active=False),
            make_product(1, stock=0),
            make_product(2, description="Unicode ok: kopi susu gula aren"),
        ]

        repository.save(products)

        assert repository.load() == products

    def test_snapshot_uses_persisted_field_names(self, repository, store):
        repository.save([make_product(7, release_date=date(2023, 5, 4))])

        payload = json.loads(store.get("products"))

        assert payload == [
            {
                "id": 7,
                "name": "Product 7",
                "description": "A sturdy product description text",
                "price": 25000.0,
                "category": "Elektronik",
                "releaseDate": "2023-05-04",
                "stock": 10,
                "isActive": True,
            }
        ]

    def test_save_overwrites_whole_list(self, repository):
        repository.save([make_product(1), make_product(2)])
        repository.save([make_product(2)])
        assert [p.id for p in repository.load()] == [2]

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            '{"id": 1}',
            '[{"id": 1, "name": "x"}]',
        ],
    )
    def test_unreadable_snapshot_is_quarantined(self, repository, store, raw):
        store.set("products", raw)

        assert repository.load() == []
        assert store.get("products.corrupt") == raw

    def test_oversized_unreadable_snapshot_still_starts_empty(self, tmp_path):
        raw = "{" + "x" * 100
        (tmp_path / "products.json").write_text(raw)
        store = FileBlobStore(tmp_path, max_bytes=50)

        assert ProductRepository(store).load() == []
        # Too large to copy aside, so the original stays where it was
        assert not (tmp_path / "products.corrupt.json").exists()
        assert store.get("products") == raw

    def test_duplicate_ids_keep_first(self, repository, store):
        store.set(
            "products",
            serialize_products(
                [make_product(1, name="first"), make_product(1, name="second")]
            ),
        )

        products = repository.load()

        assert [p.name for p in products] == ["first"]

    def test_store_outage_on_load_propagates(self):
        failing = MagicMock()
        failing.get.side_effect = PersistenceError("down")
        with pytest.raises(PersistenceError):
            ProductRepository(failing).load()


class TestMemoryBlobStore:
    def test_rejects_oversized_values(self):
        store = MemoryBlobStore(max_bytes=10)
        with pytest.raises(PersistenceError):
            store.set("products", "x" * 11)
        assert store.get("products") is None


class TestFileBlobStore:
    def test_set_and_get(self, tmp_path):
        store = FileBlobStore(tmp_path / "data")

        store.set("products", "[]")

        assert (tmp_path / "data" / "products.json").read_text() == "[]"
        assert store.get("products") == "[]"
        assert store.get("missing") is None

    def test_rejects_path_like_keys(self, tmp_path):
        store = FileBlobStore(tmp_path)
        with pytest.raises(PersistenceError):
            store.set("../escape", "[]")

    def test_rejects_oversized_values(self, tmp_path):
        store = FileBlobStore(tmp_path, max_bytes=4)
        with pytest.raises(PersistenceError):
            store.set("products", "[1, 2]")
        assert not (tmp_path / "products.json").exists()

    def test_ping_creates_directory(self, tmp_path):
        store = FileBlobStore(tmp_path / "nested" / "dir")
        assert store.ping() is True
        assert (tmp_path / "nested" / "dir").is_dir()


class TestRedisBlobStore:
    def test_uses_prefixed_keys(self):
        client = MagicMock()
        client.get.return_value = b"[]"
        store = RedisBlobStore(client, prefix="pm:")

        store.set("products", "[]")
        value = store.get("products")

        client.set.assert_called_once_with("pm:products", "[]")
        client.get.assert_called_once_with("pm:products")
        assert value == "[]"

    def test_missing_key_returns_none(self):
        client = MagicMock()
        client.get.return_value = None
        assert RedisBlobStore(client).get("products") is None

    def test_redis_errors_become_persistence_errors(self):
        client = MagicMock()
        client.get.side_effect = RedisConnectionError("refused")
        client.set.side_effect = RedisConnectionError("refused")
        store = RedisBlobStore(client)

        with pytest.raises(PersistenceError):
            store.get("products")
        with pytest.raises(PersistenceError):
            store.set("products", "[]")

    def test_ping_reports_outage(self):
        client = MagicMock()
        client.ping.side_effect = RedisConnectionError("refused")
        assert RedisBlobStore(client).ping() is False


class TestCreateBlobStore:
    def test_memory_backend(self):
        store = create_blob_store(Settings(storage_backend="memory"))
        assert isinstance(store, MemoryBlobStore)

    def test_file_backend_uses_storage_dir(self, tmp_path):
        settings = Settings(storage_backend="file", storage_dir=str(tmp_path))
        store = create_blob_store(settings)
        assert isinstance(store, FileBlobStore)
        store.set("products", "[]")
        assert (tmp_path / "products.json").read_text() == "[]"

    def test_redis_backend(self):
        settings = Settings(storage_backend="redis", redis_url="redis://localhost:6379/0")
        store = create_blob_store(settings)
        assert isinstance(store, RedisBlobStore)
