"""
Alembic environment for the tvtracker schema.

The database URL and log level come from tvtracker settings (alembic.ini carries
no URL and no logging sections), and autogenerate compares against the ORM
metadata with its constraint naming convention.
"""

import os

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from tvtracker.core.config import settings  # noqa: E402
from tvtracker.core.logging_config import setup_logging  # noqa: E402
from tvtracker.models import Base  # noqa: E402

setup_logging(level=settings.LOG_LEVEL)


def _configure(**kwargs: object) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    # Emit SQL for review instead of touching a database.
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    engine = create_engine(settings.DATABASE_URL, poolclass=NullPool)
    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place.
        _configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        )
