"""Database engine creation."""

import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./sharerepair_dev.db"


def normalize_database_url(url: str) -> str:
    """Rewrite Railway-style postgres:// URLs to the postgresql:// scheme SQLAlchemy expects."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def get_database_url() -> str:
    """DATABASE_URL from the environment, or a local SQLite file."""
    url = os.getenv("DATABASE_URL")
    if not url:
        logger.warning("No DATABASE_URL found, using SQLite: %s", DEFAULT_DATABASE_URL)
        return DEFAULT_DATABASE_URL
    return normalize_database_url(url)


def create_db_engine(url: str) -> Engine:
    """Create an engine for the given URL.

    SQLite gets NullPool (no shared connections across threads), everything
    else gets a regular connection pool.
    """
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
    return create_engine(
        url,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
