"""Recipe-to-pantry matching: what can I make with what I have?"""

import math
import re
from collections.abc import Iterable, Sequence

from mangia.schemas.pantry import PantryItemData
from mangia.schemas.recipe import IngredientMatch, RecipeData, RecipeIngredientData, RecipeMatch
from mangia.services.ingredient_matcher import names_match

# Items in the same group can stand in for each other
SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "chicken": ("chicken breast", "chicken thigh", "chicken leg", "chicken wing"),
    "beef": ("ground beef", "beef steak", "beef chuck", "stew meat"),
    "pasta": ("spaghetti", "penne", "fettuccine", "linguine", "rigatoni"),
    "rice": ("white rice", "brown rice", "jasmine rice", "basmati rice"),
    "milk": ("whole milk", "2% milk", "skim milk"),
    "oil": ("vegetable oil", "canola oil", "olive oil", "cooking oil"),
    "onion": ("yellow onion", "white onion", "red onion", "sweet onion"),
    "garlic": ("garlic clove", "minced garlic", "fresh garlic"),
    "tomato": ("roma tomato", "cherry tomato", "grape tomato", "tomatoes"),
    "pepper": ("bell pepper", "green pepper", "red pepper", "yellow pepper"),
    "cheese": ("cheddar", "mozzarella", "parmesan", "swiss", "provolone"),
}

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_COUNT_WORDS = re.compile(r"\s*\b(pieces?|slices?|cloves?|leaves?|stalks?|bunche?s?|heads?)$")
_WHITESPACE = re.compile(r"\s+")


def normalize_ingredient_name(name: str) -> str:
    """Normalize for recipe matching: drop notes in parentheses, count words and plurals."""
    name = name.lower().strip()
    name = _PARENTHETICAL.sub("", name)
    name = _COUNT_WORDS.sub("", name)
    if name.endswith("ies"):
        name = name[:-3] + "y"
    elif name.endswith("es"):
        name = name[:-2]
    elif name.endswith("s"):
        name = name[:-1]
    return _WHITESPACE.sub(" ", name).strip()


_NORMALIZED_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (base, tuple(normalize_ingredient_name(variant) for variant in variants))
    for base, variants in SUBSTITUTIONS.items()
)


def _in_group(name: str, base: str, variants: Sequence[str]) -> bool:
    return name == base or any(variant == name or variant in name for variant in variants)


def substitutes(norm_a: str, norm_b: str) -> bool:
    """True when both normalized names fall in the same substitution group."""
    return any(
        _in_group(norm_a, base, variants) and _in_group(norm_b, base, variants)
        for base, variants in _NORMALIZED_GROUPS
    )


def ingredient_matches_pantry(pantry_name: str, ingredient_name: str) -> bool:
    """Exact, containment or substitution-group match between two names."""
    norm_pantry = normalize_ingredient_name(pantry_name)
    norm_ingredient = normalize_ingredient_name(ingredient_name)

    if not norm_pantry or not norm_ingredient:
        return False

    return names_match(norm_pantry, norm_ingredient) or substitutes(norm_pantry, norm_ingredient)


def has_enough_quantity(pantry_item: PantryItemData, ingredient: RecipeIngredientData) -> bool:
    """Check if the pantry holds enough of an ingredient.

    Only compared when both sides carry a quantity and the same unit; with
    no unit conversion, anything else is assumed to be sufficient.
    """
    if pantry_item.quantity is None or ingredient.quantity is None:
        return True
    if not pantry_item.unit or not ingredient.unit:
        return True
    if pantry_item.unit.strip().lower() != ingredient.unit.strip().lower():
        return True
    return pantry_item.quantity >= ingredient.quantity


def find_pantry_match(
    ingredient: RecipeIngredientData,
    pantry_items: Sequence[PantryItemData],
) -> PantryItemData | None:
    """First pantry item that matches the ingredient."""
    return next(
        (item for item in pantry_items if ingredient_matches_pantry(item.name, ingredient.name)),
        None,
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def find_recipe_matches(
    recipes: Iterable[RecipeData],
    pantry_items: Iterable[PantryItemData],
    min_match_percentage: float = 0,
) -> list[RecipeMatch]:
    """Score recipes by the share of their ingredients already in the pantry.

    Recipes without ingredients are left out, as are recipes scoring below
    min_match_percentage. Highest scores come first; ties keep input order.
    """
    pantry = list(pantry_items)
    matches: list[RecipeMatch] = []

    for recipe in recipes:
        if not recipe.ingredients:
            continue

        have: list[IngredientMatch] = []
        missing: list[RecipeIngredientData] = []
        for ingredient in recipe.ingredients:
            pantry_match = find_pantry_match(ingredient, pantry)
            if pantry_match is None:
                missing.append(ingredient)
                continue
            have.append(
                IngredientMatch(
                    recipe_ingredient=ingredient,
                    pantry_item=pantry_match,
                    has_enough=has_enough_quantity(pantry_match, ingredient),
                )
            )

        total = len(recipe.ingredients)
        match_percentage = _round_half_up(100 * len(have) / total)
        if match_percentage < min_match_percentage:
            continue

        matches.append(
            RecipeMatch(
                recipe=recipe,
                match_percentage=match_percentage,
                have_ingredients=have,
                missing_ingredients=missing,
                total_ingredients=total,
                is_complete_match=not missing,
            )
        )

    return sorted(matches, key=lambda match: match.match_percentage, reverse=True)
