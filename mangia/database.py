"""Database configuration and session management."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from mangia.config import get_settings

settings = get_settings()

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables; schema migrations are not managed here."""
    # Import all models here so they are registered with Base.metadata
    from mangia import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
