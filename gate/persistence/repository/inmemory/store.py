"""Shared in-memory store backing the in-memory repositories."""

from gate.domain.model import AdminCode, AuditLogEntry, InviteLink, Reseller, RevenueRecord
from gate.domain.value import InviteLinkId


class InMemoryStore:
    """Tables of the in-memory backend.

    One store is shared by every repository built from the same container,
    so writes made in one request are visible to the next. Repository
    methods never await while mutating it, which makes each of them atomic
    under asyncio.
    """

    def __init__(self) -> None:
        self.admin_codes: dict[str, AdminCode] = {}
        self.resellers: dict[str, Reseller] = {}
        self.invite_links: dict[InviteLinkId, InviteLink] = {}
        self.audit_logs: list[AuditLogEntry] = []
        self.revenue: list[RevenueRecord] = []
