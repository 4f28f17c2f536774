"""Database configuration and session management."""

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, make_url
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from toolshare.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine, preparing the SQLite file location when needed."""
    if database_url.startswith("sqlite"):
        db_path = make_url(database_url).database
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from toolshare import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


def close_db() -> None:
    """Release pooled connections on shutdown."""
    engine.dispose()
