"""Pantry event model: the append-only purchase/consumption log."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from mangia.database import Base


class PantryEvent(Base):
    """One add/deduct/remove of a pantry item.

    Rows are only ever inserted. Consumption prediction reads the "added"
    rows to learn how often each staple is bought.
    """

    __tablename__ = "pantry_events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_name = Column(String(500), nullable=False)
    event_type = Column(String(20), nullable=False, index=True)  # "added" | "deducted" | "removed"
    quantity = Column(Float, nullable=True)
    unit = Column(String(100), nullable=True)
    source = Column(String(100), nullable=True)  # "bulk_add", "cooking_deduction", ...
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
