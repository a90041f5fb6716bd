import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from sqlmodel import SQLModel

# Registers posts, answers, profiles, interactions and reports on the metadata
import app.models  # noqa: F401

from app.core.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

# Kept out of the ini file to avoid interpolation of the password
db_url = str(settings.DATABASE_URL).replace("postgresql://", "postgresql+asyncpg://", 1)


def include_object(obj, name, type_, reflected, compare_to):
    """
    Never autogenerate DROPs. The hosted database also holds the auth
    provider's own tables, which are not part of our metadata.
    """
    if obj is None and compare_to is not None:
        return False
    if not reflected and compare_to is None and obj is not None:
        return True
    if reflected and compare_to is not None and obj is not None:
        return True
    return False


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = db_url

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
