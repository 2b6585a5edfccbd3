"""Repository interfaces for the gate domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from gate.domain.repository.admin_code import AdminCodeRepository
from gate.domain.repository.audit_log import AuditLogRepository
from gate.domain.repository.invite_link import InviteLinkRepository
from gate.domain.repository.reseller import ResellerRepository
from gate.domain.repository.revenue import RevenueRepository

__all__ = [
    "AdminCodeRepository",
    "AuditLogRepository",
    "InviteLinkRepository",
    "ResellerRepository",
    "RevenueRepository",
]
