"""Recipe schemas used for grocery generation, deduction and matching."""

from pydantic import BaseModel, ConfigDict, Field

from mangia.models.enums import IngredientCategory
from mangia.schemas.pantry import PantryItemData


class RecipeIngredientData(BaseModel):
    """An ingredient line of a recipe."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity: float | None = None
    unit: str | None = None
    category: IngredientCategory | None = None


class RecipeData(BaseModel):
    """A recipe snapshot. The engine never mutates it."""

    model_config = ConfigDict(from_attributes=True)

    id: int | str
    title: str
    servings: int | None = None
    ingredients: list[RecipeIngredientData] = Field(default_factory=list)


class IngredientMatch(BaseModel):
    """A recipe ingredient found in the pantry."""

    recipe_ingredient: RecipeIngredientData
    pantry_item: PantryItemData
    has_enough: bool


class RecipeMatch(BaseModel):
    """How much of a recipe can be cooked from what is on hand."""

    recipe: RecipeData
    match_percentage: int
    have_ingredients: list[IngredientMatch]
    missing_ingredients: list[RecipeIngredientData]
    total_ingredients: int
    is_complete_match: bool
