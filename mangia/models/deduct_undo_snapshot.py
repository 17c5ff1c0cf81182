"""Undo snapshot rows for the database-backed undo store."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from mangia.database import Base


class DeductUndoSnapshot(Base):
    """Pre-deduction quantities redeemable once before expires_at."""

    __tablename__ = "deduct_undo_snapshots"

    token = Column(String(36), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    snapshot = Column(JSON, nullable=False)  # [{"id": int, "quantity": float | None}, ...]
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
