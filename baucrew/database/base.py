"""
baucrew/database/base.py

Defines the declarative base class for SQLAlchemy ORM models.
Used to ensure all models inherit from the same metadata base.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used for created_at/updated_at defaults."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
