"""Schemas for cooking deductions and their undo snapshots."""

from pydantic import BaseModel, Field


class PantrySnapshot(BaseModel):
    """Quantity of a pantry item before a deduction touched it."""

    id: int | str
    quantity: float | None


class UndoEntry(BaseModel):
    """What the undo store keeps for one deduction."""

    user_id: int | str
    snapshot: list[PantrySnapshot]
    expires_at: float  # Unix timestamp, seconds


class DeductRequest(BaseModel):
    """Servings actually cooked against the recipe's base servings."""

    recipe_id: int
    servings_cooked: float = Field(..., gt=0)
    servings_original: float = Field(..., gt=0)


class DeductedItem(BaseModel):
    """One pantry item reduced by cooking."""

    pantry_item_id: int | str
    name: str
    deducted: float
    remaining: float
    removed: bool


class DeductionResult(BaseModel):
    """Outcome of deducting a recipe from the pantry."""

    deducted: list[DeductedItem]
    skipped: list[str]
    undo_token: str
