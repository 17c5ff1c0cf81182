"""Schemas for merging item lists from independent scans."""

from datetime import date

from pydantic import BaseModel, Field

from mangia.models.enums import IngredientCategory


class ScannedItem(BaseModel):
    """An item reported by a vision, OCR or voice collaborator."""

    name: str = Field(..., min_length=1)
    quantity: float = 1
    unit: str = "piece"
    category: IngredientCategory = IngredientCategory.OTHER
    confidence: float | str = "medium"  # number, or "high" | "medium" | "low"
    expiry_date: date | None = None


class ScanSource(BaseModel):
    """Items found in one photo, receipt or utterance."""

    label: str
    items: list[ScannedItem]


class DeduplicatedItem(ScannedItem):
    """A merged item and the labels of every source it came from."""

    sources: list[str]


class DeduplicationResult(BaseModel):
    items: list[DeduplicatedItem]
    total_before_dedup: int
    total_after_dedup: int
    duplicates_removed: int
