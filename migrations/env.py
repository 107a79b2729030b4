"""Alembic environment running migrations through the async engine."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection, make_url

from codemart.core.config import get_settings
from codemart.db import models  # noqa: F401
from codemart.infrastructure.database.base import Base
from codemart.infrastructure.database.session import build_engine

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
settings = get_settings()


def _is_sqlite() -> bool:
    return make_url(settings.database_url).get_backend_name() == "sqlite"


def _configure(**kwargs) -> None:
    # SQLite cannot ALTER most constraints in place, batch mode copies the table
    context.configure(target_metadata=target_metadata, render_as_batch=_is_sqlite(), **kwargs)


def run_offline() -> None:
    """Emit SQL to stdout without connecting."""
    url = make_url(settings.database_url)
    # offline rendering only needs the sync dialect
    sync_url = url.set(drivername=url.get_backend_name())
    _configure(url=sync_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = build_engine(settings)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_sync)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
