"""SQLAlchemy models."""

from mangia.models.deduct_undo_snapshot import DeductUndoSnapshot
from mangia.models.pantry import PantryItem
from mangia.models.pantry_event import PantryEvent
from mangia.models.recipe import Recipe, RecipeIngredient
from mangia.models.user import User

__all__ = [
    "User",
    "PantryItem",
    "PantryEvent",
    "Recipe",
    "RecipeIngredient",
    "DeductUndoSnapshot",
]
