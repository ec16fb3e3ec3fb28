"""Alembic migration environment for the RentalTrack schema."""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# Settings are read at import time, so CONFIG must be set first
os.environ.setdefault("CONFIG", "resources/config/local.yaml")

from rentaltrack_backend.config import settings  # noqa: E402
from rentaltrack_backend.database import Base, build_connect_args  # noqa: E402
from rentaltrack_backend.modules.auth import models as _auth  # noqa: E402, F401
from rentaltrack_backend.modules.property_management import (  # noqa: E402, F401
    models as _properties,
)
from rentaltrack_backend.modules.rent_management import (  # noqa: E402, F401
    models as _rent,
)
from rentaltrack_backend.modules.tenant_management import (  # noqa: E402, F401
    models as _tenants,
)

alembic_config = context.config
alembic_config.set_main_option("sqlalchemy.url", settings.database_url)

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

target_metadata = Base.metadata


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_offline() -> None:
    """Render the migration SQL for the configured URL without connecting."""
    _configure_and_run(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def _run_on_connection(connection: Connection) -> None:
    _configure_and_run(connection=connection)


async def run_online() -> None:
    section = alembic_config.get_section(alembic_config.config_ini_section, {})
    engine = async_engine_from_config(
        section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=build_connect_args(settings.database_url),
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
