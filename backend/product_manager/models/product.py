"""Pydantic domain models for product records and the form draft."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Fixed set of product categories.

    Values are the labels persisted in snapshots; the English member names
    are accepted as input aliases.
    """

    ELECTRONICS = "Elektronik"
    CLOTHING = "Pakaian"
    FOOD = "Makanan"
    BEVERAGE = "Minuman"

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def _missing_(cls, value: object) -> Category | None:
        if not isinstance(value, str):
            return None
        lookup = value.strip().lower()
        for member in cls:
            if lookup in (member.value.lower(), member.name.lower()):
                return member
        return None


class Product(BaseModel):
    """A finalized product record as held in the list and persisted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
    name: str = Field(..., min_length=1, max_length=100)
    description: str
    price: float = Field(..., gt=0)
    category: Category
    release_date: date
    stock: int = Field(0, ge=0)
    is_active: bool = False


class ProductDraft(BaseModel):
    """Raw form values for the record being created or edited."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    price: str | float = ""
    category: str = ""
    release_date: str = ""
    stock: int | str = 0
    is_active: bool = False

    @classmethod
    def from_product(cls, product: Product) -> ProductDraft:
        """Copy a stored record into the form."""
        return cls(
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category.value,
            release_date=product.release_date.isoformat(),
            stock=product.stock,
            is_active=product.is_active,
        )
