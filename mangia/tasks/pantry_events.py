"""Celery task for appending to the pantry event log."""

import logging

from sqlalchemy.orm import Session

from mangia.celery_app import app as celery_app
from mangia.database import SessionLocal
from mangia.models.pantry_event import PantryEvent

logger = logging.getLogger(__name__)


@celery_app.task(ignore_result=True)
def record_pantry_events(user_id: int, items: list[dict], event_type: str, source: str) -> int:
    """Insert pantry events.

    Never retried: a lost event only makes consumption predictions a little
    less informed.

    Returns:
        Number of events written
    """
    db: Session = SessionLocal()
    try:
        db.add_all(
            [
                PantryEvent(
                    user_id=user_id,
                    item_name=item["name"],
                    event_type=event_type,
                    quantity=item.get("quantity"),
                    unit=item.get("unit"),
                    source=source,
                )
                for item in items
            ]
        )
        db.commit()
        logger.info(f"Logged {len(items)} '{event_type}' pantry events for user {user_id}")
        return len(items)
    except Exception as e:
        logger.error(f"Failed to log pantry events: {e}", exc_info=True)
        db.rollback()
        return 0
    finally:
        db.close()
