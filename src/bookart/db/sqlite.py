"""Database connection and session management.

SQLite is the default backend; any SQLAlchemy URL is accepted.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    """Enable foreign keys and replace SQLite's ASCII-only lower().

    Foreign keys make ON DELETE CASCADE fire. The Unicode lower() keeps
    case-insensitive matching (ilike, icontains) correct for names like
    "Éowyn".
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


class Database:
    """Database connection and session manager."""

    def __init__(self, url: Optional[str] = None):
        """Initialize database connection.

        Args:
            url: SQLAlchemy database URL, a path to an SQLite file, or
                 ":memory:". If None, uses BOOKART_DATABASE_URL or the
                 default location.
        """
        if url is None:
            from ..config import get_config

            url = get_config().database_url

        self._is_memory = url in (":memory:", "sqlite://", "sqlite:///:memory:")
        if self._is_memory:
            self.url = "sqlite:///:memory:"
        elif "://" in url:
            self.url = url
        else:
            self.url = f"sqlite:///{Path(url).expanduser()}"

        self._is_sqlite = self.url.startswith("sqlite")
        if self._is_sqlite and not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine: Engine = create_engine(
                self.url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif self._is_sqlite:
            self.engine = create_engine(
                self.url,
                echo=False,
                connect_args={"check_same_thread": False},
            )
        else:
            self.engine = create_engine(self.url, echo=False, pool_pre_ping=True)

        if self._is_sqlite:
            event.listen(self.engine, "connect", _configure_sqlite_connection)

        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )

    @property
    def db_path(self) -> Optional[Path]:
        """Filesystem path of a file-backed SQLite database."""
        if not self._is_sqlite or self._is_memory:
            return None
        return Path(self.url.removeprefix("sqlite:///"))

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        path = self.db_path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager.

        The session is one transaction: committed when the block exits
        normally, rolled back when it raises.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database instance
_db: Optional[Database] = None


def get_db(url: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(url)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
