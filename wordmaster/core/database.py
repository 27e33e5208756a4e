"""
Database connection and session management.

Uses synchronous SQLAlchemy. PostgreSQL runs with NullPool (pooling is
delegated to pgBouncer); SQLite is accepted for local development.
"""

from typing import Generator
from contextlib import contextmanager
from urllib.parse import urlparse
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool
from sqlalchemy.orm import sessionmaker
import logging

from wordmaster.core.config import settings

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """Ensure PostgreSQL URLs use the psycopg (v3) driver."""
    if not url:
        raise ValueError("DATABASE_URL could not be constructed from settings")

    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql+psycopg://") or url.startswith("sqlite"):
        return url
    raise ValueError("DATABASE_URL must start with postgresql://, postgresql+psycopg:// or sqlite")


def _enable_sqlite_savepoints(sqlite_engine: Engine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself so SAVEPOINT (begin_nested) works on pysqlite.
    Per-record decay writes rely on savepoints.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, **engine_kwargs) -> Engine:
    """Create an engine configured for the URL's backend."""
    url = normalize_database_url(url)

    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},  # Scheduler runs DB work in a worker thread
            echo=False,
            **engine_kwargs,
        )
        _enable_sqlite_savepoints(sqlite_engine)
        return sqlite_engine

    return create_engine(
        url,
        poolclass=NullPool,       # Let pgBouncer handle all pooling
        connect_args={
            "prepare_threshold": None,  # Disable prepared statements (pgBouncer transaction mode)
        },
        pool_pre_ping=True,
        echo=False,
        **engine_kwargs,
    )


DATABASE_URL = normalize_database_url(settings.DATABASE_URL)

# Parse database URL for logging (don't log password!)
db_url = urlparse(DATABASE_URL)
logger.info(f"Database driver: {db_url.scheme}")
if db_url.hostname:
    logger.info(f"Database host: {db_url.hostname}:{db_url.port}")

engine = build_engine(DATABASE_URL)

# expire_on_commit=False keeps returned models readable after the route commits
SessionLocal = sessionmaker(
    bind=engine,
    class_=Session,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)


def create_db_and_tables(bind: Engine | None = None) -> None:
    """Create all tables (local SQLite runs only; PostgreSQL uses Alembic)."""
    # Import models so they register with SQLModel.metadata
    import wordmaster.models.database  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_db() -> Generator[Session, None, None]:
    # FastAPI dependency: one session per request, commit on success.
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions in non-FastAPI contexts.
    Used by the decay scheduler and scripts.
    Auto-commits on success, auto-rolls back on exception.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
