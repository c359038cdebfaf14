"""Database connection and session management."""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend_api.config import Settings

logger = logging.getLogger(__name__)

# Base class for declarative models
Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the database engine with connection pooling.

    Args:
        settings: Application settings holding the connection parameters

    Returns:
        Engine: SQLAlchemy engine bound to the configured PostgreSQL database
    """
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,  # Number of connections to maintain
        max_overflow=20,  # Maximum number of connections beyond pool_size
        echo=False,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the given engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def synchronize_schema(engine: Engine) -> None:
    """Create every table known to the models that does not exist yet.

    Importing the models package registers each entity on ``Base.metadata``,
    so new models are picked up without listing them here.
    """
    from backend_api import models  # noqa: F401

    logger.warning(
        f"Synchronizing database schema for tables: {', '.join(sorted(Base.metadata.tables))}"
    )
    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for getting database session.

    The session factory is the one built by the application factory and
    stored on ``app.state``.

    Yields:
        Session: SQLAlchemy database session

    Example:
        ```python
        from backend_api.database import get_db

        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
        ```
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
