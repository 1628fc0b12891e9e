"""Alembic environment for Keepsake.

The database URL comes from keepsake.config (DATABASE_URL or .env), so
migrations and the API always target the same database. alembic.ini's
sqlalchemy.url is used only when DATABASE_URL is unset.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

import keepsake.models  # noqa: F401  (registers tables on Base.metadata)
from keepsake.config import get_settings
from keepsake.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    if "DATABASE_URL" in os.environ:
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(**kwargs) -> None:
    context.configure(target_metadata=Base.metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(lambda sync_conn: _configure(connection=sync_conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
