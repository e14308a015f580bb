"""
Database configuration and connection management.

Builds the SQLAlchemy engine and session factory used by the SQL
repositories.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

logger = logging.getLogger(__name__)


def get_connect_args(db_url: str) -> dict:
    """
    Get database-specific connection arguments.

    Args:
        db_url: Database connection URL

    Returns:
        Connection arguments dict
    """
    if "sqlite" in db_url:
        return {"check_same_thread": False}
    return {}


def _safe_url(db_url: str) -> str:
    if "@" in db_url:
        return db_url.split("@")[0].rsplit(":", 1)[0] + ":***@" + db_url.split("@", 1)[1]
    return db_url


def create_db_engine(db_url: str) -> Engine:
    """
    Create an engine for the given URL.

    In-memory SQLite shares one connection so every session sees the
    same database.
    """
    logger.info(f"Using database: {_safe_url(db_url)}")
    if db_url.startswith("sqlite") and ":memory:" in db_url:
        return create_engine(
            db_url,
            connect_args=get_connect_args(db_url),
            poolclass=StaticPool,
        )
    return create_engine(
        db_url,
        connect_args=get_connect_args(db_url),
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")
