"""Keyword categorization of ingredients into store sections."""

from mangia.models.enums import IngredientCategory
from mangia.services.category_keywords import CATEGORY_KEYWORDS


def categorize_ingredient(
    name: str,
    keywords: dict[IngredientCategory, tuple[str, ...]] = CATEGORY_KEYWORDS,
) -> IngredientCategory:
    """Categorize an ingredient name into a store section.

    Returns the first section (in table order) with a keyword contained in
    the lowercased name, or OTHER when nothing matches.
    """
    lower_name = name.lower()

    for category, category_keywords in keywords.items():
        if any(keyword in lower_name for keyword in category_keywords):
            return category

    return IngredientCategory.OTHER


def get_category_order(category: IngredientCategory | str | None) -> int:
    """Sort key for store-layout display; unknown sections sort last."""
    try:
        return IngredientCategory(category).display_order
    except ValueError:
        return IngredientCategory.OTHER.display_order


def resolve_category(name: str, category: IngredientCategory | str | None) -> IngredientCategory:
    """Use a stored category when there is a valid one, else categorize by keyword."""
    if category:
        try:
            return IngredientCategory(category)
        except ValueError:
            pass
    return categorize_ingredient(name)
