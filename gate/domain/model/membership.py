"""Membership change events delivered by the messaging provider."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import MemberStatus


class TelegramUser(DomainModel):
    """Member the event is about."""

    id: int
    username: Optional[str] = None
    first_name: Optional[str] = None


class MembershipChange(str, Enum):
    """Classification of a membership event."""

    BECAME_ACTIVE = "became_active"
    BECAME_INACTIVE = "became_inactive"
    IGNORED = "ignored"


class MembershipEvent(DomainModel):
    """A member's status change in a group.

    invite_url is present only when the provider attributes the change to
    one of the bot's invite links.
    """

    update_id: Optional[int] = None
    group_id: str
    group_title: Optional[str] = None
    user: TelegramUser
    old_status: MemberStatus
    new_status: MemberStatus
    invite_url: Optional[str] = None
    occurred_at: datetime = Field(default_factory=utcnow)

    def classify(self) -> MembershipChange:
        """Classify the transition from the old and new member status."""
        if self.old_status.is_present and self.new_status.is_gone:
            return MembershipChange.BECAME_INACTIVE
        if self.new_status == MemberStatus.MEMBER and self.invite_url:
            return MembershipChange.BECAME_ACTIVE
        return MembershipChange.IGNORED
