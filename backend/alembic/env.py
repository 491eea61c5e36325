"""Alembic environment for the IDP schema.

DATABASE_URL comes from idp.core.config.settings so migrations and the API
always target the same store. SQLite URLs run in batch mode so ALTERs work
during local development.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from idp.core.config import settings
from idp.db.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DB_URL = settings.DATABASE_URL
# ConfigParser interpolation treats % specially
config.set_main_option("sqlalchemy.url", DB_URL.replace("%", "%%"))

target_metadata = Base.metadata


def _context_options() -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": DB_URL.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    context.configure(
        url=DB_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, **_context_options())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
