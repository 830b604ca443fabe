"""Alembic environment for the workout records schema.

Runs against the sync form of the configured database URL. SQLite (used for
local dev via DATABASE_URL_OVERRIDE) gets batch mode, since it cannot ALTER
most constraints in place.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

import app.models  # noqa: F401 - registers sessions, set logs, records, program exercises
from app.core.config import get_settings
from app.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = get_settings().database_url
config.set_main_option("sqlalchemy.url", database_url)


def _configure_options() -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": database_url.startswith("sqlite"),
    }


if context.is_offline_mode():
    context.configure(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"}, **_configure_options())
    with context.begin_transaction():
        context.run_migrations()
else:
    engine = create_engine(database_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **_configure_options())
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()
