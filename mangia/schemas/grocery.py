"""Grocery list schemas."""

from pydantic import BaseModel, Field

from mangia.models.enums import IngredientCategory


class RecipeRef(BaseModel):
    """Which recipe asked for how much of a grocery item."""

    recipe_id: int | str
    recipe_title: str
    quantity: float


class ConsolidatedGroceryItem(BaseModel):
    """Ingredient demand summed across recipes, minus what the pantry holds.

    Built fresh on every generation call; never persisted.
    """

    name: str
    total_quantity: float
    unit: str
    category: IngredientCategory
    from_recipes: list[RecipeRef]
    in_pantry: bool = False
    pantry_quantity: float = 0
    need_to_buy: float = Field(0, ge=0)
