"""Database session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings
from app.exceptions import StoreError

logger = logging.getLogger("prof_smart")


def connect_args_for(url: str, statement_timeout_ms: int) -> dict:
    """Driver-specific connection arguments."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    if url.startswith("postgresql"):
        return {"options": f"-c statement_timeout={statement_timeout_ms}"}
    return {}


settings = get_settings()
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=not settings.DATABASE_URL.startswith("sqlite"),
    connect_args=connect_args_for(settings.DATABASE_URL, settings.DB_STATEMENT_TIMEOUT_MS),
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_db() -> Generator[Session, None, None]:
    """Yield a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, message: str | None = None) -> Iterator[None]:
    """Roll back and re-raise persistence failures as StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error: %s", e.__class__.__name__)
        raise StoreError(message) from e
