"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the bookart application,
including in-memory databases, a Flask test client, auth headers and
sample catalog data.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from bookart.auth.manager import UserManager
from bookart.auth.schemas import UserCreate, UserRole
from bookart.auth.tokens import issue_token
from bookart.catalog.manager import BookManager, ChapterManager, SeriesManager
from bookart.config import Config, reset_config
from bookart.db.schemas import BookCreate, ChapterCreate, SeriesCreate
from bookart.db.sqlite import Database, reset_db
from bookart.web import create_app

TEST_SECRET = "test-secret-key"
NIL_ID = "00000000-0000-0000-0000-000000000000"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def file_db_env(temp_db_path: Path) -> Generator[Path, None, None]:
    """Point the global config and database at a temporary file."""
    reset_db()
    reset_config()
    os.environ["BOOKART_DATABASE_URL"] = f"sqlite:///{temp_db_path}"
    yield temp_db_path

    reset_db()
    reset_config()
    del os.environ["BOOKART_DATABASE_URL"]


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


# ============================================================================
# Web Fixtures
# ============================================================================


@pytest.fixture
def config() -> Config:
    """Configuration used by the test app."""
    return Config(
        database_url="sqlite:///:memory:",
        secret_key=TEST_SECRET,
        token_ttl=3600,
        log_level="DEBUG",
        host="127.0.0.1",
        port=5000,
    )


@pytest.fixture
def app(config: Config, db: Database) -> Flask:
    """Flask app bound to the in-memory database."""
    application = create_app(config, db)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Flask test client."""
    return app.test_client()


def _headers_for(db: Database, email: str, role: UserRole) -> dict[str, str]:
    user = UserManager(db).register(
        UserCreate(email=email, password="password123", username=email.split("@")[0]),
        role=role,
    )
    token = issue_token(user.id, user.email, role == UserRole.ADMIN, TEST_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db: Database) -> dict[str, str]:
    """Authorization header for an admin account."""
    return _headers_for(db, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def user_headers(db: Database) -> dict[str, str]:
    """Authorization header for a regular account."""
    return _headers_for(db, "reader@example.com", UserRole.USER)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def series(db: Database):
    """A series in the database."""
    return SeriesManager(db).create(
        SeriesCreate(
            title="The Lord of the Rings",
            author="J.R.R. Tolkien",
            description="An epic high fantasy.",
        )
    )


@pytest.fixture
def other_series(db: Database):
    """A second, unrelated series."""
    return SeriesManager(db).create(SeriesCreate(title="Dune Chronicles", author="Frank Herbert"))


@pytest.fixture
def book(db: Database, series):
    """A book in ``series``."""
    return BookManager(db).create(
        BookCreate(
            series_id=series.id,
            title="The Fellowship of the Ring",
            author="J.R.R. Tolkien",
        )
    )


@pytest.fixture
def chapter(db: Database, book):
    """First chapter of ``book``."""
    return ChapterManager(db).create(
        ChapterCreate(book_id=book.id, title="A Long-expected Party", chapter_number=1)
    )
