"""Fuzzy ingredient matching for pantry operations (deduction, dedup, merge)."""

import re
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

# Words that describe how an item is prepared or sold rather than what it is
QUALIFIERS = (
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
    "organic",
    "boneless",
    "skinless",
    "raw",
    "cooked",
    "frozen",
    "canned",
    "ground",
    "extra",
    "virgin",
    "low fat",
    "nonfat",
    "fat free",
    "unsalted",
    "salted",
)

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_QUALIFIER_WORDS = re.compile(r"\b(" + "|".join(QUALIFIERS) + r")\b")

# Shorter names than this never match by containment ("oil" vs "foil")
MIN_SUBSTRING_LENGTH = 4


def _singularize(name: str) -> str:
    """Drop one trailing "s", leaving "ss" endings (glass, bass) alone."""
    if name.endswith("s") and not name.endswith("ss"):
        return name[:-1]
    return name


def _normalize_once(name: str) -> str:
    name = name.lower().strip()
    name = _NON_ALNUM.sub("", name)
    name = _WHITESPACE.sub(" ", name)
    name = _QUALIFIER_WORDS.sub("", name)
    name = _WHITESPACE.sub(" ", name).strip()
    return _singularize(name)


def normalize_item_name(name: str) -> str:
    """Normalize an item name for comparison.

    Lowercases, strips punctuation and whitespace, removes qualifier words
    ("fresh", "organic", "unsalted", ...) and drops a trailing plural "s".
    The steps are repeated until the result is stable, so normalizing a
    normalized name returns it unchanged.
    """
    current = name
    while True:
        normalized = _normalize_once(current)
        if normalized == current:
            return normalized
        current = normalized


def names_match(norm_a: str, norm_b: str) -> bool:
    """Compare two already-normalized names."""
    if not norm_a or not norm_b:
        return False

    if norm_a == norm_b:
        return True

    # Substring match for cases like "chicken" matching "chicken breast"
    shorter, longer = sorted((norm_a, norm_b), key=len)
    return len(shorter) >= MIN_SUBSTRING_LENGTH and shorter in longer


def ingredients_match(a: str, b: str) -> bool:
    """Check if two ingredient names denote the same item."""
    return names_match(normalize_item_name(a), normalize_item_name(b))


def find_best_match(
    target: str,
    candidates: Iterable[T],
    key: Callable[[T], str] = str,
) -> T | None:
    """Find the candidate that best matches target.

    An exact normalized match anywhere in the list wins over a fuzzy match
    earlier in the list. Within each tier the first candidate wins.
    """
    norm_target = normalize_item_name(target)
    normalized = [(candidate, normalize_item_name(key(candidate))) for candidate in candidates]

    if norm_target:
        for candidate, norm_candidate in normalized:
            if norm_candidate == norm_target:
                return candidate

    for candidate, norm_candidate in normalized:
        if names_match(norm_target, norm_candidate):
            return candidate

    return None
