"""Domain value objects for gate.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from gate.domain.value.common import RootValueObject

ACCESS_CODE_PATTERN = re.compile(r"^[A-Z0-9]{6,20}$")


class AccessCode(RootValueObject[str]):
    """Opaque code identifying an admin, a reseller or a single link grant.

    Codes are case-insensitive: surrounding whitespace is trimmed and the
    value is upper-cased before validation. 6-20 characters of [A-Z0-9].
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        """Trim and upper-case raw input."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("root")
    @classmethod
    def validate_access_code_format(cls, v: str) -> str:
        """Validate access code format."""
        if not ACCESS_CODE_PATTERN.match(v):
            raise ValueError("Access code must be 6-20 characters of A-Z and 0-9")
        return v

    @property
    def redacted(self) -> str:
        """Three-character prefix, safe to log for privileged codes."""
        return self.root[:3] + "***"


class LinkStatus(str, Enum):
    """Status of an invite link.

    ``active`` and ``used`` are the only states a member can still be
    attributed to; the rest only leave through explicit admin actions.
    """

    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"
    REVOKED = "revoked"
    BANNED = "banned"
    CLOSED_BY_PROVIDER = "closed_by_provider"


class LinkTrigger(str, Enum):
    """Event that moves a link between statuses."""

    ISSUE = "issue"
    SUPERSEDE = "supersede"
    MEMBER_JOINED = "member_joined"
    MEMBER_LEFT = "member_left"
    REVOKE = "revoke"
    BAN = "ban"
    UNBAN = "unban"
    REGENERATE = "regenerate"
    EXPIRE = "expire"


class MemberStatus(str, Enum):
    """Telegram chat member status."""

    CREATOR = "creator"
    ADMINISTRATOR = "administrator"
    MEMBER = "member"
    RESTRICTED = "restricted"
    LEFT = "left"
    KICKED = "kicked"
    BANNED = "banned"

    @property
    def is_present(self) -> bool:
        """Whether a member with this status is in the group."""
        return self in PRESENT_MEMBER_STATUSES

    @property
    def is_gone(self) -> bool:
        """Whether a member with this status has left or been removed."""
        return self in GONE_MEMBER_STATUSES


PRESENT_MEMBER_STATUSES = frozenset(
    {
        MemberStatus.CREATOR,
        MemberStatus.ADMINISTRATOR,
        MemberStatus.MEMBER,
        MemberStatus.RESTRICTED,
    }
)
GONE_MEMBER_STATUSES = frozenset(
    {MemberStatus.LEFT, MemberStatus.KICKED, MemberStatus.BANNED}
)


class RemoteOutcome(str, Enum):
    """Outcome of a best-effort gateway call.

    - ok: the provider confirmed the operation (or it was already done)
    - warning: the provider rejected the call; local state is still committed
    - unknown: the provider could not be reached; its state is unknown
    """

    OK = "ok"
    WARNING = "warning"
    UNKNOWN = "unknown"


class IdentityKind(str, Enum):
    """Kind of identity an access code resolves to."""

    ADMIN = "admin"
    RESELLER = "reseller"
    END_USER = "end_user"


class Capability(str, Enum):
    """Authorization capabilities carried in an identity's scope."""

    ISSUE_ANY_GROUP = "issue_any_group"
    ISSUE_OWN_GROUP = "issue_own_group"
    MANAGE_LINKS = "manage_links"
    MANAGE_CREDITS = "manage_credits"
    VIEW_ANY_LINK = "view_any_link"
    VIEW_ISSUED_LINKS = "view_issued_links"
    VIEW_OWN_LINK = "view_own_link"


class AuditAction(str, Enum):
    """Audit log action names."""

    CREATE_LINK = "create_link"
    SUPERSEDE_LINK = "supersede_link"
    MEMBER_JOINED = "member_joined"
    MEMBER_LEFT = "member_left"
    AUTO_REVOKE_ON_LEAVE = "auto_revoke_on_leave"
    REVOKE_TELEGRAM = "revoke_telegram"
    BAN_LINK = "ban_link"
    UNBAN_LINK = "unban_link"
    REGENERATE_LINK = "regenerate_link"
    EXPIRE_LINK = "expire_link"
    DELETE_LINK = "delete_link"
    PERMANENT_DELETE_LINK = "permanent_delete_link"
    ADD_CREDITS = "add_credits"


class EntityType(str, Enum):
    """Kind of entity an audit entry is about."""

    INVITE_LINK = "invite_link"
    GROUP = "group"
    RESELLER = "reseller"
