"""Validate product drafts and enforce field constraints."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any

from product_manager.models.product import Category, ProductDraft

NAME_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 20
STOCK_MIN = 0
STOCK_MAX = 1000

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_price(value: str | float) -> float:
    """Parse a raw price input; raises ValueError for non-numeric input."""
    if isinstance(value, bool):
        raise ValueError("Price must be a number")
    price = float(value.strip() if isinstance(value, str) else value)
    if not math.isfinite(price):
        raise ValueError("Price must be a finite number")
    return price


def parse_stock(value: int | str) -> int:
    """Parse a raw stock input; raises ValueError for non-integer input."""
    if isinstance(value, bool):
        raise ValueError("Stock must be a whole number")
    if isinstance(value, int):
        return value
    return int(str(value).strip())


def parse_category(value: str) -> Category:
    """Resolve a stored label or English alias; raises ValueError otherwise."""
    return Category(value)


def parse_release_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD date; raises ValueError otherwise."""
    value = value.strip()
    # fromisoformat also takes basic and week forms on newer Pythons
    if not _ISO_DATE.match(value):
        raise ValueError(f"Not a YYYY-MM-DD date: {value!r}")
    return date.fromisoformat(value)


def validate_draft(draft: ProductDraft, today: date | None = None) -> dict[str, str]:
    """Return a field -> message mapping for every rule the draft breaks.

    All rules run; an empty mapping means the draft may be submitted.
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    name = draft.name.strip()
    if not name:
        errors["name"] = "Product name is required."
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"Product name must be at most {NAME_MAX_LENGTH} characters."

    description = draft.description.strip()
    if not description:
        errors["description"] = "Description is required."
    elif len(description) < DESCRIPTION_MIN_LENGTH:
        errors["description"] = (
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters."
        )

    if _is_blank(draft.price):
        errors["price"] = "Price is required."
    else:
        try:
            price = parse_price(draft.price)
        except ValueError:
            errors["price"] = "Price must be a number."
        else:
            if price <= 0:
                errors["price"] = "Price must be greater than 0."

    if _is_blank(draft.category):
        errors["category"] = "Category is required."
    else:
        try:
            parse_category(draft.category)
        except ValueError:
            allowed = ", ".join(member.value for member in Category)
            errors["category"] = f"Category must be one of: {allowed}."

    if _is_blank(draft.release_date):
        errors["release_date"] = "Release date is required."
    else:
        try:
            release_date = parse_release_date(draft.release_date)
        except ValueError:
            errors["release_date"] = "Release date must be a valid date."
        else:
            if release_date > today:
                errors["release_date"] = "Release date cannot be in the future."

    try:
        stock = parse_stock(draft.stock)
    except ValueError:
        errors["stock"] = "Stock must be a whole number."
    else:
        if stock < STOCK_MIN:
            errors["stock"] = "Stock cannot be negative."

    return errors
