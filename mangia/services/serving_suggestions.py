"""Serving counts to offer when scaling a recipe."""

COMMON_SERVINGS = (1, 2, 4, 6, 8)
MAX_SERVINGS = 24
MAX_SUGGESTIONS = 6


def get_serving_suggestions(original_servings: int) -> list[int]:
    """Suggest serving counts around a recipe's base servings.

    Mixes the common counts with the original, double and (from 2 up) half
    the original, keeps 1..24 and returns the six smallest.
    """
    suggestions = set(COMMON_SERVINGS)
    suggestions.add(original_servings)
    suggestions.add(original_servings * 2)
    if original_servings >= 2:
        suggestions.add(original_servings // 2)

    valid = sorted(s for s in suggestions if 0 < s <= MAX_SERVINGS)
    return valid[:MAX_SUGGESTIONS]
