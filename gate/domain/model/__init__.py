"""Domain model entities for gate."""

from gate.domain.model.audit_log import AuditLogEntry
from gate.domain.model.identity import (
    AdminCode,
    AdminIdentity,
    EndUserIdentity,
    Identity,
    Reseller,
    ResellerIdentity,
)
from gate.domain.model.invite_link import ClientInfo, InviteLink
from gate.domain.model.membership import (
    MembershipChange,
    MembershipEvent,
    TelegramUser,
)
from gate.domain.model.revenue import RevenueRecord
from gate.domain.model.transition import TransitionResult

__all__ = [
    "AdminCode",
    "AdminIdentity",
    "AuditLogEntry",
    "ClientInfo",
    "EndUserIdentity",
    "Identity",
    "InviteLink",
    "MembershipChange",
    "MembershipEvent",
    "Reseller",
    "ResellerIdentity",
    "RevenueRecord",
    "TelegramUser",
    "TransitionResult",
]
