"""
Database connection and session management for the User Service
"""
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session
from typing import Generator
import logging

from ..common.db import Database
from .config import settings

logger = logging.getLogger(__name__)

database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
engine = database.engine
SessionLocal = database.SessionLocal

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    yield from database.session()


def init_db() -> None:
    """Create the users table. Called on application startup."""
    try:
        from .models import User  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("User database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def check_db_connection() -> bool:
    return database.check_connection()
