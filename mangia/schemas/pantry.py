"""Pantry schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mangia.models.enums import IngredientCategory


class PantryItemData(BaseModel):
    """A pantry row as seen by the engine."""

    model_config = ConfigDict(from_attributes=True)

    id: int | str
    name: str
    quantity: float | None = None
    unit: str | None = None
    category: IngredientCategory = IngredientCategory.OTHER
    expiry_date: date | None = None

    @field_validator("category", mode="before")
    @classmethod
    def unknown_category_as_other(cls, value):
        # Rows edited by hand can hold sections that no longer exist
        if value is None or value not in {c.value for c in IngredientCategory}:
            return IngredientCategory.OTHER
        return value


class BulkAddItem(BaseModel):
    """One item coming from a scan, receipt, voice parse or manual entry."""

    name: str = Field(..., min_length=1, max_length=500)
    quantity: float = Field(1, ge=0)
    unit: str = Field("piece", max_length=100)
    category: IngredientCategory | None = None
    source: str | None = Field(None, max_length=100)
    expiry_date: date | None = None


class BulkAddResult(BaseModel):
    """Result of adding or merging items into the pantry."""

    added: int
    merged: int
    items: list[PantryItemData]


class ExpiryAlertItem(BaseModel):
    """Pantry item annotated with how far away its expiry is."""

    id: int | str
    name: str
    category: IngredientCategory
    quantity: float | None
    unit: str | None
    expiry_date: date
    expiry_text: str
    days_until_expiry: int


class ExpiryAlertCounts(BaseModel):
    expired: int
    expiring: int
    total: int


class ExpiryAlerts(BaseModel):
    """Pantry items inside the alert window, split by whether they already expired."""

    expired: list[ExpiryAlertItem]
    expiring: list[ExpiryAlertItem]
    counts: ExpiryAlertCounts


class StockCheckResult(BaseModel):
    """Stock level of a single item looked up by free text."""

    found: bool
    item: str
    quantity: float | None = None
    unit: str | None = None
    status: str | None = None
    status_label: str | None = None
    expiry_date: date | None = None
