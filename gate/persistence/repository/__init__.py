"""PostgreSQL repository implementations."""

from gate.persistence.repository.admin_code import PostgresAdminCodeRepository
from gate.persistence.repository.audit_log import PostgresAuditLogRepository
from gate.persistence.repository.invite_link import PostgresInviteLinkRepository
from gate.persistence.repository.reseller import PostgresResellerRepository
from gate.persistence.repository.revenue import PostgresRevenueRepository

__all__ = [
    "PostgresAdminCodeRepository",
    "PostgresAuditLogRepository",
    "PostgresInviteLinkRepository",
    "PostgresResellerRepository",
    "PostgresRevenueRepository",
]
