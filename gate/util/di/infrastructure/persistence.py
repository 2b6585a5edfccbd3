"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gate.config import Settings
from gate.domain.repository import (
    AdminCodeRepository,
    AuditLogRepository,
    InviteLinkRepository,
    ResellerRepository,
    RevenueRepository,
)
from gate.persistence.database import create_engine, create_session_factory
from gate.persistence.repository import (
    PostgresAdminCodeRepository,
    PostgresAuditLogRepository,
    PostgresInviteLinkRepository,
    PostgresResellerRepository,
    PostgresRevenueRepository,
)
from gate.util.di.base import ProviderBase
from gate.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_admin_code_repository(self, session: AsyncSession) -> AdminCodeRepository:
        """Provide AdminCode repository."""
        return PostgresAdminCodeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reseller_repository(self, session: AsyncSession) -> ResellerRepository:
        """Provide Reseller repository."""
        return PostgresResellerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_link_repository(
        self, session: AsyncSession
    ) -> InviteLinkRepository:
        """Provide InviteLink repository."""
        return PostgresInviteLinkRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, session: AsyncSession) -> AuditLogRepository:
        """Provide AuditLog repository."""
        return PostgresAuditLogRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_revenue_repository(self, session: AsyncSession) -> RevenueRepository:
        """Provide Revenue repository."""
        return PostgresRevenueRepository(session)
