from logging.config import fileConfig
import os
import sys
import logging
from sqlalchemy import create_engine

from alembic import context

# Add the project root directory to Python's path
# This allows Alembic to find the app module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import the models so Alembic can discover them
from app.core.database import Base
from app.core.config import settings
from app.modules.auth.models import User, UserSettings  # noqa: F401
from app.modules.filters.models import CustomFilter  # noqa: F401
from app.modules.tenders.models import Tender, Entity, Municipality  # noqa: F401

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except Exception as e:
        # Set up basic logging if fileConfig fails
        logging.basicConfig(level=logging.INFO)
        logging.info(f"Could not configure logging from file: {e}")

# model MetaData for 'autogenerate' support
target_metadata = Base.metadata

def get_url():
    # Same resolution as the application: DATABASE_URL first, then the DB_* parts
    return settings.database_url

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Configures the context with just a URL, so no DBAPI is needed.
    Calls to context.execute() emit the given string to the script output.
    """
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection."""
    engine = create_engine(get_url())

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite"
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
