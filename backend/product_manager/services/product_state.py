"""Pure state transitions for the product list and its form.

Every function takes an ``AppState`` and returns a new one; nothing here
touches storage, clocks or notifications. ``ProductManager`` wires these
transitions to the outside world.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from product_manager.models.product import Product, ProductDraft
from product_manager.utils.product_validator import (
    STOCK_MAX,
    parse_category,
    parse_price,
    parse_release_date,
    parse_stock,
    validate_draft,
)


class AppState(BaseModel):
    """Everything the product screen holds between user actions."""

    model_config = ConfigDict(frozen=True)

    products: tuple[Product, ...] = ()
    draft: ProductDraft = Field(default_factory=ProductDraft)
    editing_id: int | None = None
    errors: dict[str, str] = Field(default_factory=dict)
    # At most one entry: the confirmation currently awaiting an answer.
    pending_deletes: dict[str, int] = Field(default_factory=dict)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def find(self, product_id: int) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def ids(self) -> list[int]:
        return [p.id for p in self.products]


class SubmitOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    INVALID = "invalid"
    # The record being edited was deleted before the draft was submitted.
    STALE = "stale"


class SubmitResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: AppState
    outcome: SubmitOutcome
    product: Product | None = None
    errors: dict[str, str] = Field(default_factory=dict)


def initial_state(products: list[Product] | tuple[Product, ...] = ()) -> AppState:
    return AppState(products=tuple(products))


def start_create(state: AppState) -> AppState:
    """Clear the form and leave edit mode."""
    return state.model_copy(
        update={
            "draft": ProductDraft(),
            "editing_id": None,
            "errors": {},
            "pending_deletes": {},
        }
    )


def start_edit(state: AppState, product_id: int) -> AppState:
    """Load a record into the form; unknown ids leave the state untouched."""
    product = state.find(product_id)
    if product is None:
        return state
    return state.model_copy(
        update={
            "draft": ProductDraft.from_product(product),
            "editing_id": product.id,
            "errors": {},
            "pending_deletes": {},
        }
    )


def update_draft(state: AppState, changes: dict[str, Any]) -> AppState:
    """Apply raw form input to the draft.

    The stock control is a 0-1000 slider, so values above the cap are
    refused here; the lower bound is left to ``validate_draft``.
    """
    unknown = set(changes) - set(ProductDraft.model_fields)
    if unknown:
        raise ValueError(f"Unknown draft field(s): {', '.join(sorted(unknown))}")
    if "stock" in changes:
        try:
            stock = parse_stock(changes["stock"])
        except ValueError:
            stock = None
        if stock is not None and stock > STOCK_MAX:
            raise ValueError(f"Stock cannot exceed {STOCK_MAX}")
    draft = ProductDraft.model_validate({**state.draft.model_dump(), **changes})
    return state.model_copy(update={"draft": draft})


def build_product(draft: ProductDraft, product_id: int) -> Product:
    """Finalize a valid draft into a record."""
    return Product(
        id=product_id,
        name=draft.name.strip(),
        description=draft.description.strip(),
        price=parse_price(draft.price),
        category=parse_category(draft.category),
        release_date=parse_release_date(draft.release_date),
        stock=parse_stock(draft.stock),
        is_active=draft.is_active,
    )


def submit(state: AppState, *, today: date, new_id: int) -> SubmitResult:
    """Validate the draft and create or update a record.

    ``new_id`` is only used in create mode; the caller guarantees it is not
    already taken.
    """
    errors = validate_draft(state.draft, today=today)
    if errors:
        return SubmitResult(
            state=state.model_copy(update={"errors": errors}),
            outcome=SubmitOutcome.INVALID,
            errors=errors,
        )

    if state.editing_id is None:
        if state.find(new_id) is not None:
            raise ValueError(f"Product id {new_id} is already in use")
        product = build_product(state.draft, new_id)
        products = (product, *state.products)
        outcome = SubmitOutcome.CREATED
    else:
        if state.find(state.editing_id) is None:
            return SubmitResult(state=start_create(state), outcome=SubmitOutcome.STALE)
        product = build_product(state.draft, state.editing_id)
        products = tuple(product if p.id == product.id else p for p in state.products)
        outcome = SubmitOutcome.UPDATED

    next_state = start_create(state.model_copy(update={"products": products}))
    return SubmitResult(state=next_state, outcome=outcome, product=product)


def request_delete(state: AppState, product_id: int, token: str) -> AppState:
    """Ask for confirmation, replacing any earlier unanswered request.

    Unknown ids leave the state untouched.
    """
    if state.find(product_id) is None:
        return state
    return state.model_copy(update={"pending_deletes": {token: product_id}})


def cancel_delete(state: AppState, token: str) -> AppState:
    """Drop a pending confirmation; raises KeyError for unknown tokens."""
    if token not in state.pending_deletes:
        raise KeyError(token)
    pending = {k: v for k, v in state.pending_deletes.items() if k != token}
    return state.model_copy(update={"pending_deletes": pending})


def confirm_delete(state: AppState, token: str) -> tuple[AppState, Product | None]:
    """Remove the record behind a confirmation token.

    Returns the removed record, or None if it vanished in the meantime.
    Raises KeyError for unknown tokens.
    """
    product_id = state.pending_deletes.get(token)
    if product_id is None:
        raise KeyError(token)
    state = cancel_delete(state, token)
    product = state.find(product_id)
    if product is None:
        return state, None

    products = tuple(p for p in state.products if p.id != product_id)
    state = state.model_copy(update={"products": products})
    if state.editing_id == product_id:
        state = start_create(state)
    return state, product
