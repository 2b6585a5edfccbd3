"""Domain layer DI providers."""

from dishka import Scope, provide

from gate.config import AccessCodeSettings, ReconcilerSettings, TelegramSettings
from gate.domain.repository import (
    AdminCodeRepository,
    AuditLogRepository,
    InviteLinkRepository,
    ResellerRepository,
    RevenueRepository,
)
from gate.domain.service import (
    AuditService,
    CreditService,
    IdentityService,
    LinkService,
    MessagingGateway,
    ReconcilerService,
)
from gate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request and each webhook update gets fresh service instances
    with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_audit_service(
        self, audit_log_repository: AuditLogRepository
    ) -> AuditService:
        """Provide audit log domain service."""
        return AuditService(audit_log_repository=audit_log_repository)

    @provide
    def get_credit_service(
        self, reseller_repository: ResellerRepository
    ) -> CreditService:
        """Provide credit ledger domain service."""
        return CreditService(reseller_repository=reseller_repository)

    @provide
    def get_identity_service(
        self,
        admin_code_repository: AdminCodeRepository,
        reseller_repository: ResellerRepository,
        invite_link_repository: InviteLinkRepository,
    ) -> IdentityService:
        """Provide identity resolver domain service."""
        return IdentityService(
            admin_code_repository=admin_code_repository,
            reseller_repository=reseller_repository,
            invite_link_repository=invite_link_repository,
        )

    @provide
    def get_link_service(
        self,
        invite_link_repository: InviteLinkRepository,
        revenue_repository: RevenueRepository,
        gateway: MessagingGateway,
        identity_service: IdentityService,
        credit_service: CreditService,
        audit_service: AuditService,
        telegram_settings: TelegramSettings,
        access_code_settings: AccessCodeSettings,
    ) -> LinkService:
        """Provide link ledger domain service."""
        return LinkService(
            invite_link_repository=invite_link_repository,
            revenue_repository=revenue_repository,
            gateway=gateway,
            identity_service=identity_service,
            credit_service=credit_service,
            audit_service=audit_service,
            telegram_settings=telegram_settings,
            access_code_settings=access_code_settings,
        )

    @provide
    def get_reconciler_service(
        self,
        invite_link_repository: InviteLinkRepository,
        link_service: LinkService,
        audit_service: AuditService,
        reconciler_settings: ReconcilerSettings,
    ) -> ReconcilerService:
        """Provide membership reconciler domain service."""
        return ReconcilerService(
            invite_link_repository=invite_link_repository,
            link_service=link_service,
            audit_service=audit_service,
            settings=reconciler_settings,
        )
