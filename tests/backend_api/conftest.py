"""Pytest fixtures for backend_api tests."""

import os
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from backend_api.config import Settings
from backend_api.core.users import UserRepository
from backend_api.database import Base
from backend_api.main import create_app
from backend_api.models.user import User, UserRole
from backend_api.schemas.user import UserCreate


@pytest.fixture(scope="function")
def test_db_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Create a database engine for testing.

    Uses TEST_DATABASE_URL (e.g. a PostgreSQL test database) when set,
    otherwise a throwaway SQLite file.
    """
    test_db_url = os.getenv("TEST_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")

    connect_args = {"check_same_thread": False} if test_db_url.startswith("sqlite") else {}
    engine = create_engine(test_db_url, pool_pre_ping=True, connect_args=connect_args)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Cleanup: drop all tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine: Engine) -> Generator[Session, None, None]:
    """Create a database session for testing with automatic rollback."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine,
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        # Rollback any uncommitted changes to clean up test data
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings built without reading the environment's .env file."""
    return Settings(database_password="test-password", _env_file=None)


@pytest.fixture(scope="function")
def test_app(test_settings: Settings, test_db_engine: Engine) -> FastAPI:
    """Application wired to the test database engine."""
    return create_app(settings=test_settings, engine=test_db_engine)


@pytest.fixture(scope="function")
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client. Lifespan events are not run."""
    client = TestClient(test_app)
    try:
        yield client
    finally:
        client.close()


@pytest.fixture(scope="function")
def user_repository(test_db_session: Session) -> UserRepository:
    """User repository bound to the test session."""
    return UserRepository(test_db_session)


@pytest.fixture(scope="function")
def create_user(user_repository: UserRepository) -> Callable:
    """Factory function to create users through the repository.

    Example:
        ```python
        def test_example(create_user):
            user = create_user(email="test@example.com")
            assert user.role == UserRole.USER
        ```
    """

    def _create_user(
        email: str = "test@example.com",
        password: str = "testpassword123",
        first_name: str | None = "Test",
        last_name: str | None = "User",
        role: UserRole = UserRole.USER,
    ) -> User:
        return user_repository.create(
            UserCreate(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
        )

    return _create_user
