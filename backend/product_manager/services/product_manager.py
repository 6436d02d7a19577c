"""Record lifecycle controller for the product screen."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import date
from typing import Any

from pydantic import BaseModel

from product_manager.models.product import Product
from product_manager.services import product_state
from product_manager.services.notifications import NotificationCenter
from product_manager.services.product_state import (
    AppState,
    SubmitOutcome,
    SubmitResult,
)
from product_manager.storage.blob_store import PersistenceError
from product_manager.storage.product_repository import ProductRepository
from product_manager.utils.identifiers import allocate_product_id, current_millis

logger = logging.getLogger(__name__)

MSG_INVALID = "Please check your input."
MSG_CREATED = "Product added successfully."
MSG_UPDATED = "Product updated successfully."
MSG_DELETED = "Product deleted successfully."
MSG_SAVE_FAILED = "Changes could not be saved."


class PendingDelete(BaseModel):
    token: str
    product_id: int
    prompt: str


class ProductManager:
    """Mediates between the form draft, the product list and storage.

    The list is loaded once on construction and the full list is written
    back after every create, update and delete.
    """

    def __init__(
        self,
        repository: ProductRepository,
        notifications: NotificationCenter | None = None,
        *,
        state: AppState | None = None,
        today: Callable[[], date] = date.today,
        clock_ms: Callable[[], int] = current_millis,
    ):
        self._repository = repository
        self._notifications = notifications or NotificationCenter()
        self._today = today
        self._clock_ms = clock_ms
        if state is None:
            state = product_state.initial_state(repository.load())
        self._state = state

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def products(self) -> tuple[Product, ...]:
        return self._state.products

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    @property
    def repository(self) -> ProductRepository:
        return self._repository

    def get(self, product_id: int) -> Product | None:
        return self._state.find(product_id)

    def start_create(self) -> AppState:
        self._state = product_state.start_create(self._state)
        return self._state

    def start_edit(self, product_id: int) -> AppState:
        state = product_state.start_edit(self._state, product_id)
        if state is self._state:
            logger.debug(f"Edit requested for unknown product {product_id}; ignoring")
        self._state = state
        return self._state

    def update_draft(self, **changes: Any) -> AppState:
        self._state = product_state.update_draft(self._state, changes)
        return self._state

    def submit(self) -> SubmitResult:
        """Validate the draft, then create or update and persist."""
        new_id = allocate_product_id(self._state.ids(), now_ms=self._clock_ms())
        result = product_state.submit(self._state, today=self._today(), new_id=new_id)
        self._state = result.state

        if result.outcome is SubmitOutcome.INVALID:
            logger.info(f"Draft rejected: {', '.join(sorted(result.errors))}")
            self._notifications.danger(MSG_INVALID)
            return result
        if result.outcome is SubmitOutcome.STALE:
            logger.info("Edited product no longer exists; draft discarded")
            return result

        if result.outcome is SubmitOutcome.CREATED:
            logger.info(f"Created product {result.product.id}")
            self._notifications.success(MSG_CREATED)
        else:
            logger.info(f"Updated product {result.product.id}")
            self._notifications.success(MSG_UPDATED)
        self._persist()
        return result

    def request_delete(self, product_id: int) -> PendingDelete | None:
        """Start a delete; returns None when the product does not exist."""
        product = self._state.find(product_id)
        if product is None:
            logger.debug(f"Delete requested for unknown product {product_id}; ignoring")
            return None
        token = uuid.uuid4().hex
        self._state = product_state.request_delete(self._state, product_id, token)
        return PendingDelete(
            token=token,
            product_id=product_id,
            prompt=f'Delete product "{product.name}"?',
        )

    def confirm_delete(self, token: str) -> Product | None:
        """Finish a delete; raises KeyError for unknown tokens."""
        self._state, removed = product_state.confirm_delete(self._state, token)
        if removed is None:
            logger.debug("Confirmed delete of a product that is already gone")
            return None
        logger.info(f"Deleted product {removed.id}")
        self._notifications.success(MSG_DELETED)
        self._persist()
        return removed

    def cancel_delete(self, token: str) -> None:
        """Abandon a delete; raises KeyError for unknown tokens."""
        self._state = product_state.cancel_delete(self._state, token)

    def delete(self, product_id: int, confirm: Callable[[str], bool]) -> Product | None:
        """Delete behind a synchronous yes/no prompt."""
        pending = self.request_delete(product_id)
        if pending is None:
            return None
        if not confirm(pending.prompt):
            self.cancel_delete(pending.token)
            return None
        return self.confirm_delete(pending.token)

    def _persist(self) -> None:
        try:
            self._repository.save(self._state.products)
        except PersistenceError as e:
            logger.error(f"Failed to persist products: {e}", exc_info=True)
            self._notifications.danger(MSG_SAVE_FAILED)
