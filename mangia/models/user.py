"""User model."""

from sqlalchemy import Column, Integer, String

from mangia.database import Base
from mangia.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Owner of pantry items, recipes and pantry events."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
