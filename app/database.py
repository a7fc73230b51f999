"""Database Configuration and Connection Management Module

This module handles database connectivity, session management, and table operations
for the interview coach service.

The module contains functions for database session management, table creation,
and connection configuration. Streaming turns outlive the request-scoped session,
so routes can also depend on the session factory itself and open their own
short-lived sessions.

Dependencies:
- sqlalchemy: For database ORM and connection management.
- loguru: For logging operations.
- app.core.config: For the database URL.
- app.models.interview_models: For database model definitions.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from loguru import logger
from app.core.config import DATABASE_URL
from app.models.interview_models import Base

_engine_kwargs = {"echo": False, "pool_pre_ping": True}
if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared with the event loop thread pool
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs["pool_recycle"] = 300

engine = create_engine(DATABASE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db_session():
    """FastAPI dependency for database session management.

    Creates a new database session for each request and ensures proper
    cleanup after the request is completed.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """FastAPI dependency returning the session factory for work that outlives the request."""
    return SessionLocal


def check_database_connection() -> bool:
    """Run a trivial query to confirm the database is reachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connectivity check failed: {e}")
        return False


def create_tables():
    """Create all database tables defined in the models.

    Raises:
        Exception: If table creation fails

    Note:
        This operation is idempotent - existing tables won't be modified
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database table: {e}")
        raise
