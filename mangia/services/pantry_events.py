"""Log pantry add/deduct/remove events for predictive reordering."""

import logging
from collections.abc import Iterable
from typing import Any

from mangia.models.enums import PantryEventType

logger = logging.getLogger(__name__)


def log_pantry_events(
    user_id: int,
    items: Iterable[dict[str, Any]],
    event_type: PantryEventType,
    source: str,
) -> None:
    """Queue pantry events for insertion in the background.

    Fire-and-forget: the caller never waits on the insert, and a failure to
    queue is logged rather than raised.

    Args:
        user_id: Owner of the events
        items: Dicts with "name", "quantity" and "unit"
        event_type: What happened to the items
        source: Where the change came from, e.g. "bulk_add"
    """
    payload = [
        {"name": item["name"], "quantity": item.get("quantity"), "unit": item.get("unit")}
        for item in items
    ]
    if not payload:
        return

    try:
        from mangia.tasks.pantry_events import record_pantry_events

        record_pantry_events.delay(user_id, payload, str(event_type), source)
        logger.debug(f"Queued {len(payload)} '{event_type}' pantry events for user {user_id}")
    except Exception as e:
        logger.error(f"Failed to queue pantry events: {e}")
