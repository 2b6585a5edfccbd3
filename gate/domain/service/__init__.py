"""Domain services."""

from .audit_service import AuditService
from .credit_service import CreditService
from .gateway import (
    GatewayError,
    GatewayLink,
    GatewayRevokeResult,
    MessagingGateway,
)
from .identity_service import IdentityService, parse_access_code
from .link_service import LinkService
from .reconciler_service import ReconcileOutcome, ReconcilerService

__all__ = [
    "AuditService",
    "CreditService",
    "GatewayError",
    "GatewayLink",
    "GatewayRevokeResult",
    "IdentityService",
    "LinkService",
    "MessagingGateway",
    "ReconcileOutcome",
    "ReconcilerService",
    "parse_access_code",
]
