from logging.config import fileConfig

from sqlalchemy import create_engine, text

from alembic import context

from spotmap.core.config import SQLALCHEMY_DATABASE_URL
from spotmap.core.database.models import Base

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
# This line sets up loggers basically.
fileConfig(config.config_file_name)  # type: ignore

target_metadata = Base.metadata

# Migrations run synchronously, so swap the asyncpg driver for the default one
SYNC_DATABASE_URL = f"postgresql://{SQLALCHEMY_DATABASE_URL.split('://')[1]}"


def run_migrations_offline():
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    context.configure(
        url=SYNC_DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run migrations in 'online' mode against the configured database."""
    engine = create_engine(SYNC_DATABASE_URL)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            connection.execute(text("SELECT pg_advisory_xact_lock(10000);"))
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
