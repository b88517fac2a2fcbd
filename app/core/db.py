"""
Database connection management.

Supports:
  - PostgreSQL (default, built from the POSTGRES_* settings)
  - SQLite (local dev and tests)

Connection string comes from DATABASE_URL when set.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import PersistenceError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(url: str = None):
    """Create SQLAlchemy engine."""
    db_url = url or settings.sync_database_url

    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise each session gets its own empty database
        return create_engine(db_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)

    if db_url.startswith("sqlite"):
        return create_engine(db_url, connect_args={"check_same_thread": False})

    return create_engine(db_url, pool_size=10, max_overflow=20, pool_pre_ping=True)


engine = create_db_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(bind=None):
    """Create all tables. Safe to call multiple times."""
    import app.models  # noqa: F401  registers every table on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a unit of work: commit on success, roll back on any failure.

    Store failures surface as PersistenceError; domain errors raised inside
    the block propagate unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error, transaction rolled back: {e}")
        raise PersistenceError("Database operation failed") from e
    except Exception:
        db.rollback()
        raise
