import os
import sys
from logging.config import fileConfig
from sqlalchemy import engine_from_config, make_url
from sqlalchemy import pool
from alembic import context

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from travelflow.models.base import Base
from travelflow.models.auth import user  # noqa: F401
from travelflow.models.finance import budget, project  # noqa: F401
from travelflow.models.system import notification  # noqa: F401
from travelflow.models.travel import expense_item, receipt, travel_request, valley_request  # noqa: F401
from travelflow.core.config import settings

# this is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Alembic runs synchronously, so drop the async driver from the URL
if not config.get_main_option("sqlalchemy.url"):
    database_url = settings.DATABASE_URL.replace("+asyncpg", "").replace("+aiosqlite", "")
    config.set_main_option("sqlalchemy.url", str(make_url(database_url)))

target_metadata = Base.metadata

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    if environment == "production" and "downgrade" in sys.argv:
        raise RuntimeError("Downgrades are blocked in production")

    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
