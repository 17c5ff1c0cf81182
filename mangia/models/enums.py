"""Enums for model fields."""

from enum import StrEnum


class IngredientCategory(StrEnum):
    """Store sections, declared in shopping display order."""

    PRODUCE = "produce"
    MEAT_SEAFOOD = "meat_seafood"
    DAIRY_EGGS = "dairy_eggs"
    BAKERY = "bakery"
    FROZEN = "frozen"
    CANNED = "canned"
    PANTRY = "pantry"
    OTHER = "other"

    @property
    def display_order(self) -> int:
        """1-based position of this section when walking the store."""
        return list(IngredientCategory).index(self) + 1


class PantryEventType(StrEnum):
    """Kinds of entries in the append-only pantry event log."""

    ADDED = "added"
    DEDUCTED = "deducted"
    REMOVED = "removed"


class Urgency(StrEnum):
    """How soon a staple is predicted to run out."""

    NOW = "now"
    SOON = "soon"
    UPCOMING = "upcoming"

    @property
    def rank(self) -> int:
        return list(Urgency).index(self)
