import asyncio

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

from statusboard.config import settings
from statusboard.db.base import Base
from statusboard.db.models import (  # noqa: F401
    LlmConfiguration,
    PortfolioAnalysis,
    Project,
    TechnicalReview,
    WeeklyStatusReport,
)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.DATABASE_URL)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
