"""Application layer DI providers."""

from dishka import Scope, provide

from gate.application.usecase.auth import VerifyCodeUseCase
from gate.application.usecase.link import (
    ChangeLinkStatusUseCase,
    DeleteLinkUseCase,
    ExpireLinksUseCase,
    GetLinkUseCase,
    IssueLinkUseCase,
)
from gate.application.usecase.membership import ReconcileUpdateUseCase
from gate.application.usecase.reseller import AddCreditsUseCase
from gate.domain.service import (
    AuditService,
    CreditService,
    IdentityService,
    LinkService,
    ReconcilerService,
)
from gate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_verify_code_use_case(
        self, identity_service: IdentityService
    ) -> VerifyCodeUseCase:
        """Provide verify code use case."""
        return VerifyCodeUseCase(identity_service=identity_service)

    # Link use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_link_use_case(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> IssueLinkUseCase:
        """Provide issue link use case."""
        return IssueLinkUseCase(
            identity_service=identity_service, link_service=link_service
        )

    @provide(scope=Scope.REQUEST)
    def get_change_link_status_use_case(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> ChangeLinkStatusUseCase:
        """Provide change link status use case."""
        return ChangeLinkStatusUseCase(
            identity_service=identity_service, link_service=link_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_link_use_case(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> DeleteLinkUseCase:
        """Provide delete link use case."""
        return DeleteLinkUseCase(
            identity_service=identity_service, link_service=link_service
        )

    @provide(scope=Scope.REQUEST)
    def get_expire_links_use_case(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> ExpireLinksUseCase:
        """Provide expire links use case."""
        return ExpireLinksUseCase(
            identity_service=identity_service, link_service=link_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_link_use_case(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> GetLinkUseCase:
        """Provide get link use case."""
        return GetLinkUseCase(
            identity_service=identity_service, link_service=link_service
        )

    # Reseller use cases
    @provide(scope=Scope.REQUEST)
    def get_add_credits_use_case(
        self,
        identity_service: IdentityService,
        credit_service: CreditService,
        audit_service: AuditService,
    ) -> AddCreditsUseCase:
        """Provide add credits use case."""
        return AddCreditsUseCase(
            identity_service=identity_service,
            credit_service=credit_service,
            audit_service=audit_service,
        )

    # Membership use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_update_use_case(
        self, reconciler_service: ReconcilerService
    ) -> ReconcileUpdateUseCase:
        """Provide reconcile update use case."""
        return ReconcileUpdateUseCase(reconciler_service=reconciler_service)
