"""Telegram webhook update parsing.

Only the fields reconciliation needs are modelled; everything else in
the payload is ignored.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gate.domain.model import MembershipEvent, TelegramUser
from gate.domain.value import MemberStatus


class _TelegramObject(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TelegramChat(_TelegramObject):
    id: int
    title: Optional[str] = None


class TelegramFrom(_TelegramObject):
    id: int
    username: Optional[str] = None
    first_name: Optional[str] = None


class TelegramChatMember(_TelegramObject):
    status: str
    user: TelegramFrom


class TelegramInviteLink(_TelegramObject):
    invite_link: str


class ChatMemberUpdated(_TelegramObject):
    """Payload of a chat_member update."""

    chat: TelegramChat
    from_user: Optional[TelegramFrom] = Field(default=None, alias="from")
    date: int
    old_chat_member: TelegramChatMember
    new_chat_member: TelegramChatMember
    invite_link: Optional[TelegramInviteLink] = None


class TelegramUpdate(_TelegramObject):
    """Incoming webhook update."""

    update_id: int
    chat_member: Optional[ChatMemberUpdated] = None


def to_membership_event(update: TelegramUpdate) -> MembershipEvent | None:
    """Convert a chat_member update to a membership event.

    Args:
        update: Parsed webhook update

    Returns:
        The membership event, or None for other update kinds and for
        member statuses the reconciler does not know
    """
    changed = update.chat_member
    if changed is None:
        return None

    try:
        old_status = MemberStatus(changed.old_chat_member.status)
        new_status = MemberStatus(changed.new_chat_member.status)
    except ValueError:
        return None

    member = changed.new_chat_member.user
    return MembershipEvent(
        update_id=update.update_id,
        group_id=str(changed.chat.id),
        group_title=changed.chat.title,
        user=TelegramUser(
            id=member.id, username=member.username, first_name=member.first_name
        ),
        old_status=old_status,
        new_status=new_status,
        invite_url=changed.invite_link.invite_link if changed.invite_link else None,
        occurred_at=datetime.fromtimestamp(changed.date, tz=timezone.utc),
    )
