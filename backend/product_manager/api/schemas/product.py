"""Pydantic models describing product form and table payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from product_manager.models.product import Category, ProductDraft
from product_manager.utils.product_validator import NAME_MAX_LENGTH, STOCK_MAX, STOCK_MIN


class ProductRead(BaseModel):
    id: int
    name: str
    description: str
    price: float
    category: Category
    release_date: date
    stock: int
    is_active: bool

    model_config = {"from_attributes": True}


class ProductRow(BaseModel):
    """One table row as the list renders it."""

    index: int = Field(..., description="1-based position in the list")
    id: int
    name: str
    category: str
    price: float
    price_display: str
    stock: int
    is_active: bool
    status: str


class ProductTable(BaseModel):
    items: list[ProductRow]
    total: int
    empty_message: str | None = None


class DraftUpdate(BaseModel):
    """Partial form input; only fields sent are applied."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    price: str | float | None = None
    category: str | None = None
    release_date: str | None = None
    stock: int | str | None = Field(None, description="Slider value, capped at 1000")
    is_active: bool | None = None


class CategoryOption(BaseModel):
    value: str
    label: str


class FormControls(BaseModel):
    name_max_length: int = NAME_MAX_LENGTH
    stock_min: int = STOCK_MIN
    stock_max: int = STOCK_MAX
    categories: list[CategoryOption] = Field(
        default_factory=lambda: [
            CategoryOption(value=c.value, label=c.label) for c in Category
        ]
    )


class FormView(BaseModel):
    mode: str = Field(..., description="create|edit")
    title: str
    submit_label: str
    show_cancel: bool
    editing_id: int | None = None
    draft: ProductDraft
    errors: dict[str, str] = Field(default_factory=dict)
    controls: FormControls = Field(default_factory=FormControls)


class SubmitResponse(BaseModel):
    outcome: str = Field(..., description="created|updated|stale")
    product: ProductRead | None = None
    form: FormView


class PendingDeleteRead(BaseModel):
    token: str
    product_id: int
    prompt: str
