"""Grocery list generation: consolidate recipe demand and subtract the pantry."""

import re
from collections.abc import Iterable

from mangia.schemas.grocery import ConsolidatedGroceryItem, RecipeRef
from mangia.schemas.pantry import PantryItemData
from mangia.schemas.recipe import RecipeData
from mangia.services.categorization import get_category_order, resolve_category

# Preparation and size words only; "canned tomatoes" stays a separate purchase
# from "tomatoes", unlike pantry matching
CONSOLIDATION_QUALIFIERS = (
    "fresh",
    "dried",
    "chopped",
    "minced",
    "diced",
    "sliced",
    "whole",
    "large",
    "small",
    "medium",
    "optional",
)

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_QUALIFIER_WORDS = re.compile(r"\b(" + "|".join(CONSOLIDATION_QUALIFIERS) + r")\b")


def consolidation_key(name: str) -> str:
    """Key under which ingredient lines from different recipes are summed."""
    name = name.lower().strip()
    name = _NON_ALNUM.sub("", name)
    name = _QUALIFIER_WORDS.sub("", name)
    return _WHITESPACE.sub(" ", name).strip()


def generate_grocery_items(
    recipes: Iterable[RecipeData],
    pantry_items: Iterable[PantryItemData],
) -> list[ConsolidatedGroceryItem]:
    """Consolidate ingredients across recipes and subtract pantry stock.

    Lines sharing a consolidation key are summed, keeping the display name,
    unit and category of the first line seen. The result is ordered by store
    section; within a section, items keep first-seen order. When several
    pantry items share a key, the last one is used.
    """
    pantry_by_key: dict[str, PantryItemData] = {}
    for pantry_item in pantry_items:
        pantry_by_key[consolidation_key(pantry_item.name)] = pantry_item

    consolidated: dict[str, ConsolidatedGroceryItem] = {}
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = consolidation_key(ingredient.name)
            quantity = ingredient.quantity or 0
            ref = RecipeRef(recipe_id=recipe.id, recipe_title=recipe.title, quantity=quantity)

            existing = consolidated.get(key)
            if existing is not None:
                existing.total_quantity += quantity
                existing.from_recipes.append(ref)
                continue

            consolidated[key] = ConsolidatedGroceryItem(
                name=ingredient.name,
                total_quantity=quantity,
                unit=ingredient.unit or "",
                category=resolve_category(ingredient.name, ingredient.category),
                from_recipes=[ref],
            )

    for key, item in consolidated.items():
        pantry_item = pantry_by_key.get(key)
        item.in_pantry = pantry_item is not None
        item.pantry_quantity = (pantry_item.quantity or 0) if pantry_item else 0
        item.need_to_buy = max(0, item.total_quantity - item.pantry_quantity)

    # sorted() is stable, so ties keep insertion order
    return sorted(consolidated.values(), key=lambda item: get_category_order(item.category))
