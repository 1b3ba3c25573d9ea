"""Migration environment for the fitness tracker schema.

The target database comes from ``Settings.database_url`` (the synchronous
twin of the app's async URL). ``alembic -x dsn=<url> upgrade head`` points a
single run somewhere else; async driver names are accepted there too.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url

from fitness_tracker.core.config import get_settings
from fitness_tracker.db.base import Base
from fitness_tracker.models import *  # noqa: F401, F403 - register all models

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    dsn = context.get_x_argument(as_dictionary=True).get("dsn")
    if not dsn:
        return get_settings().database_url
    url = make_url(dsn)
    return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=_migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_migration_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
