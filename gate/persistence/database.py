"""Database engine and session factory for PostgreSQL (asyncpg)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gate.config import Settings

APPLICATION_NAME = "gate-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Args:
        settings: Application settings with database URL and pool sizes

    Returns:
        Async engine; connections are tagged with the application name so
        they can be told apart in pg_stat_activity
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Repositories issue Core statements and read results right away, so
    objects are never expired on commit and nothing is autoflushed.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
