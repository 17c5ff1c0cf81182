"""Pydantic schemas for data passed into and out of the pantry engine."""

from mangia.schemas.deduction import DeductedItem, DeductionResult, DeductRequest, PantrySnapshot
from mangia.schemas.grocery import ConsolidatedGroceryItem, RecipeRef
from mangia.schemas.pantry import BulkAddItem, BulkAddResult, ExpiryAlerts, PantryItemData
from mangia.schemas.prediction import PurchaseEvent, ReorderPrediction
from mangia.schemas.recipe import RecipeData, RecipeIngredientData, RecipeMatch
from mangia.schemas.scan import DeduplicationResult, ScannedItem, ScanSource

__all__ = [
    "PantryItemData",
    "BulkAddItem",
    "BulkAddResult",
    "ExpiryAlerts",
    "RecipeData",
    "RecipeIngredientData",
    "RecipeMatch",
    "ConsolidatedGroceryItem",
    "RecipeRef",
    "DeductRequest",
    "DeductedItem",
    "DeductionResult",
    "PantrySnapshot",
    "PurchaseEvent",
    "ReorderPrediction",
    "ScannedItem",
    "ScanSource",
    "DeduplicationResult",
]
