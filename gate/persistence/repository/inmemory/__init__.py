"""In-memory repository implementations for testing."""

from .admin_code import InMemoryAdminCodeRepository
from .audit_log import InMemoryAuditLogRepository
from .invite_link import InMemoryInviteLinkRepository
from .reseller import InMemoryResellerRepository
from .revenue import InMemoryRevenueRepository
from .store import InMemoryStore

__all__ = [
    "InMemoryAdminCodeRepository",
    "InMemoryAuditLogRepository",
    "InMemoryInviteLinkRepository",
    "InMemoryResellerRepository",
    "InMemoryRevenueRepository",
    "InMemoryStore",
]
