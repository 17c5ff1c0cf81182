"""Deduplication of scanned pantry items across multiple photos and scans."""

import logging
from collections.abc import Iterable

from mangia.schemas.scan import DeduplicatedItem, DeduplicationResult, ScanSource
from mangia.services.ingredient_matcher import ingredients_match, normalize_item_name

logger = logging.getLogger(__name__)

CONFIDENCE_LEVELS = {
    "high": 0.9,
    "medium": 0.7,
    "low": 0.5,
}


def confidence_to_number(confidence: float | str) -> float:
    """Map a high/medium/low label to a score; numbers pass through."""
    if isinstance(confidence, int | float):
        return float(confidence)
    return CONFIDENCE_LEVELS.get(confidence.lower().strip(), 0.5)


def deduplicate_items(sources: Iterable[ScanSource]) -> DeduplicationResult:
    """Merge item lists from independent sources into one list.

    Sources and their items are processed in order. An item merges into the
    first accumulated entry with the same normalized name, or whose current
    display name fuzzily matches it. On merge quantities are summed, the
    name and confidence of the more confident sighting are kept, and the
    source label is recorded once.
    """
    total_before = 0
    merged: dict[str, DeduplicatedItem] = {}

    for source in sources:
        for item in source.items:
            total_before += 1
            norm_name = normalize_item_name(item.name)

            match_key = None
            for key, existing in merged.items():
                if key == norm_name or ingredients_match(item.name, existing.name):
                    match_key = key
                    break

            if match_key is None:
                merged[norm_name] = DeduplicatedItem(
                    **item.model_dump(),
                    sources=[source.label],
                )
                continue

            existing = merged[match_key]
            existing.quantity += item.quantity
            if confidence_to_number(item.confidence) > confidence_to_number(existing.confidence):
                existing.name = item.name
                existing.confidence = item.confidence
            if source.label not in existing.sources:
                existing.sources.append(source.label)

    items = list(merged.values())
    logger.debug(f"Deduplicated {total_before} scanned items into {len(items)}")
    return DeduplicationResult(
        items=items,
        total_before_dedup=total_before,
        total_after_dedup=len(items),
        duplicates_removed=total_before - len(items),
    )
