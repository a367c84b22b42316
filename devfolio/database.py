"""Database configuration and session management."""

import json
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from devfolio.config import get_settings

settings = get_settings()


def dump_json(value: Any) -> str:
    """Serialize JSON columns with non-ASCII text kept literal, so text matching sees it."""
    return json.dumps(value, ensure_ascii=False)


if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        json_serializer=dump_json,
    )
else:
    engine = create_engine(
        settings.database_url,
        json_serializer=dump_json,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> None:
    """Run a trivial query; raises if the database is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from devfolio import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
