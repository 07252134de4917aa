"""Shared test fixtures."""

import os

# Settings are read at import time; cheap hashing and a throwaway database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from animelodica.database import Base, get_db  # noqa: E402
from animelodica.main import app  # noqa: E402
from animelodica.rate_limiter import limiter  # noqa: E402
from tests.accounts_fixtures import user_fixture  # noqa: E402


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads."""
    # Clear rate limiter storage between tests
    limiter.reset()

    # Use StaticPool to share same connection across all threads
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_maker):
    """A database session for direct service and repository calls."""
    session = session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_maker):
    """Create test client backed by the in-memory database."""

    def override_get_db():
        db = session_maker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    """A registered user with the default valid password."""
    return user_fixture(db)
