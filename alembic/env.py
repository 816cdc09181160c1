"""Alembic environment for the jobs / responsibilities schema."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from jobweights.adapters.persistence.database import Base
from jobweights.adapters.persistence.models import (  # noqa: F401 — ensure models are registered
    JobModel,
    JobResponsibilityModel,
    ResponsibilityModel,
)
from jobweights.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url() -> str:
    """Migrations run on a sync driver: asyncpg → psycopg2, aiosqlite → pysqlite."""
    return settings.database_url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")


def _configure(**kwargs) -> None:
    url = _sync_url()
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    _configure(
        url=_sync_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _sync_url()
    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
