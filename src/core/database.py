"""Database connection and session management.

This module handles the document store connection using SQLAlchemy. Each
collection maps to one table; embedded documents are JSON columns.
"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from config import DATABASE_URL, DB_POOL_SIZE
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine for ``url`` with the configured pool size."""
    if url.startswith("sqlite"):
        database = make_url(url).database
        if database and database != ":memory:":
            # Ensure the directory holding the database file exists
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_size=DB_POOL_SIZE, pool_pre_ping=True)


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create tables and indexes if they do not exist."""
    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
