"""Pantry item model for tracking what is on hand at home."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from mangia.database import Base
from mangia.models.mixins import TimestampMixin


class PantryItem(Base, TimestampMixin):
    """Pantry item with an optional quantity and expiry date."""

    __tablename__ = "pantry_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(500), nullable=False)  # Display name
    normalized_name = Column(String(500), nullable=False, index=True)  # See normalize_item_name
    quantity = Column(Float, nullable=True)
    unit = Column(String(100), nullable=True)
    category = Column(String(20), nullable=False, default="other")
    expiry_date = Column(Date, nullable=True)

    # Relationships
    user = relationship("User", backref="pantry_items")
