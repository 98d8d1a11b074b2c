import importlib
import os
import pathlib
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from connectibles import Base  # noqa: E402

MODEL_MODULES = (
    "auth",
    "connections",
    "messages",
    "moderation",
    "notifications",
    "games",
    "truth_dare",
    "feed",
)

for name in MODEL_MODULES:
    importlib.import_module(f"connectibles.domains.{name}.models")

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def sync_database_url() -> str:
    """Migrations run on a blocking driver even when the app uses an async one."""
    url = (
        os.environ.get("ALEMBIC_SYNC_DB_URL")
        or os.environ.get("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
    )
    return url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")


config.set_main_option("sqlalchemy.url", sync_database_url())

CONTEXT_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    "compare_server_default": True,
    "render_as_batch": config.get_main_option("sqlalchemy.url").startswith("sqlite"),
}


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **CONTEXT_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, **CONTEXT_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
