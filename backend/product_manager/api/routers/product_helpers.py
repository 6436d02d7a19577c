"""Shared helpers for shaping form and table responses."""
from __future__ import annotations

from collections.abc import Sequence

from product_manager.api.schemas.product import FormView, ProductRow, ProductTable
from product_manager.models.product import Product
from product_manager.services.product_state import AppState
from product_manager.utils.formatting import format_price, format_status

EMPTY_TABLE_MESSAGE = "No products yet."


def build_table(products: Sequence[Product]) -> ProductTable:
    """Turn the product list into numbered display rows."""
    rows = [
        ProductRow(
            index=position,
            id=p.id,
            name=p.name,
            category=p.category.value,
            price=p.price,
            price_display=format_price(p.price),
            stock=p.stock,
            is_active=p.is_active,
            status=format_status(p.is_active),
        )
        for position, p in enumerate(products, start=1)
    ]
    return ProductTable(
        items=rows,
        total=len(rows),
        empty_message=None if rows else EMPTY_TABLE_MESSAGE,
    )


def build_form(state: AppState) -> FormView:
    """Describe the form for the current mode (create or edit)."""
    editing = state.is_editing
    return FormView(
        mode="edit" if editing else "create",
        title="Edit Product" if editing else "Add Product",
        submit_label="Save Changes" if editing else "Add Product",
        show_cancel=editing,
        editing_id=state.editing_id,
        draft=state.draft,
        errors=dict(state.errors),
    )
