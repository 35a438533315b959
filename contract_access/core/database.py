# =====================================================
# FILE: contract_access/core/database.py
# Database Connection and Session Management
# =====================================================

from contextlib import contextmanager
from functools import lru_cache
from typing import Generator
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

from contract_access.core.config import settings

logger = logging.getLogger(__name__)


@lru_cache
def get_engine() -> Engine:
    """Create the engine on first use so importing this module never connects"""
    engine_args = {
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
        "echo": settings.DB_ECHO,
    }

    # Use appropriate connection pool based on environment
    if settings.DEBUG:
        engine_args["poolclass"] = NullPool
    else:
        engine_args["pool_size"] = settings.DB_POOL_SIZE
        engine_args["max_overflow"] = settings.DB_MAX_OVERFLOW
        engine_args["poolclass"] = QueuePool

    try:
        engine = create_engine(settings.database_url, **engine_args)
        logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
        return engine
    except Exception as e:
        logger.error(f"Failed to create database engine: {str(e)}")
        raise


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False
    )


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI
    """
    db = get_session_factory()()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session():
    """
    Context manager for read operations outside of FastAPI requests
    """
    session = get_session_factory()()
    try:
        yield session
    except Exception as e:
        logger.error(f"Database operation failed: {str(e)}")
        session.rollback()
        raise
    finally:
        session.close()


def test_connection() -> bool:
    """
    Test database connection
    """
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")
            return True
    except Exception as e:
        logger.error(f"Database connection test failed: {str(e)}")
        return False
