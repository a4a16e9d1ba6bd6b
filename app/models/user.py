"""User model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(UTC).replace(tzinfo=None)


class User(Base):
    """Registered player account.

    ``reset_token`` and ``reset_expires`` are written and cleared together.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    reset_token = Column(String(16), nullable=True)
    reset_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
