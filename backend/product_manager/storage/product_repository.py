"""Load and save the full product list as one JSON snapshot."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from product_manager.models.product import Product
from product_manager.storage.blob_store import BlobStore, PersistenceError

logger = logging.getLogger(__name__)

QUARANTINE_SUFFIX = ".corrupt"

_product_list = TypeAdapter(list[Product])


def serialize_products(products: Sequence[Product]) -> str:
    """Encode products as a JSON array using the persisted field names."""
    return json.dumps(
        [p.model_dump(mode="json", by_alias=True) for p in products],
        ensure_ascii=False,
    )


def deserialize_products(raw: str) -> list[Product]:
    """Decode a snapshot; raises pydantic ValidationError on bad input."""
    return _product_list.validate_json(raw)


def _drop_duplicate_ids(products: list[Product]) -> list[Product]:
    seen: set[int] = set()
    unique: list[Product] = []
    for product in products:
        if product.id in seen:
            logger.warning(f"Dropping duplicate product id {product.id} from snapshot")
            continue
        seen.add(product.id)
        unique.append(product)
    return unique


class ProductRepository:
    """Persist the product list under a single blob store key."""

    def __init__(self, store: BlobStore, key: str = "products"):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def store(self) -> BlobStore:
        return self._store

    def load(self) -> list[Product]:
        """Return the stored list, or an empty one if absent or unreadable.

        Unreadable snapshots are copied to ``<key>.corrupt`` (when the store
        accepts them) before the caller gets an empty list, so the next save
        does not destroy them.
        Store outages propagate as PersistenceError.
        """
        raw = self._store.get(self._key)
        if raw is None or not raw.strip():
            logger.info(f"No stored snapshot under '{self._key}', starting empty")
            return []
        try:
            products = deserialize_products(raw)
        except ValidationError as e:
            quarantine_key = f"{self._key}{QUARANTINE_SUFFIX}"
            logger.error(
                f"Stored snapshot under '{self._key}' is unreadable "
                f"({e.error_count()} error(s)); moved to '{quarantine_key}'"
            )
            try:
                self._store.set(quarantine_key, raw)
            except PersistenceError as quarantine_error:
                logger.error(
                    f"Could not quarantine unreadable snapshot to "
                    f"'{quarantine_key}': {quarantine_error}"
                )
            return []
        products = _drop_duplicate_ids(products)
        logger.info(f"Loaded {len(products)} product(s) from '{self._key}'")
        return products

    def save(self, products: Sequence[Product]) -> None:
        """Overwrite the stored snapshot with the full list."""
        self._store.set(self._key, serialize_products(products))
        logger.debug(f"Saved {len(products)} product(s) to '{self._key}'")
