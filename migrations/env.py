"""Alembic environment for the memory engine schema (sync, psycopg3 or SQLite)."""

from logging.config import fileConfig

from sqlalchemy import pool, create_engine
from sqlalchemy.engine import Connection
from sqlmodel import SQLModel

from alembic import context

from wordmaster.core.config import settings
from wordmaster.core.database import normalize_database_url

# Registers words, user_words, review_history and daily_stats on SQLModel.metadata
import wordmaster.models.database  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

# Direct (non-pgBouncer) connection when MIGRATION_DATABASE_URL is set
MIGRATION_URL = normalize_database_url(settings.get_migration_database_url())


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,  # catch enum/float column type drift in autogenerate
        render_as_batch=MIGRATION_URL.startswith("sqlite"),  # SQLite cannot ALTER columns in place
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    _configure(url=MIGRATION_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(MIGRATION_URL, poolclass=pool.NullPool)
    try:
        with connectable.connect() as connection:
            do_run_migrations(connection)
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
