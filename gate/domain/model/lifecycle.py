"""Invite link lifecycle.

The transition table is the single definition of which trigger may move a
link out of which status. Any (status, trigger) pair missing from it is
rejected.
"""

from gate.domain.error import InvalidTransitionError
from gate.domain.value import LinkStatus, LinkTrigger

TRANSITIONS: dict[tuple[LinkStatus, LinkTrigger], LinkStatus] = {
    # Provider reports the member joined through this link
    (LinkStatus.ACTIVE, LinkTrigger.MEMBER_JOINED): LinkStatus.USED,
    # Provider reports the member left. A join can be missed, so an active
    # link matched by URL closes too.
    (LinkStatus.ACTIVE, LinkTrigger.MEMBER_LEFT): LinkStatus.CLOSED_BY_PROVIDER,
    (LinkStatus.USED, LinkTrigger.MEMBER_LEFT): LinkStatus.CLOSED_BY_PROVIDER,
    # Admin actions
    (LinkStatus.ACTIVE, LinkTrigger.REVOKE): LinkStatus.REVOKED,
    (LinkStatus.USED, LinkTrigger.REVOKE): LinkStatus.REVOKED,
    (LinkStatus.ACTIVE, LinkTrigger.BAN): LinkStatus.BANNED,
    (LinkStatus.USED, LinkTrigger.BAN): LinkStatus.BANNED,
    # Unban lands on revoked; getting back in needs an explicit regenerate
    (LinkStatus.BANNED, LinkTrigger.UNBAN): LinkStatus.REVOKED,
    (LinkStatus.REVOKED, LinkTrigger.REGENERATE): LinkStatus.ACTIVE,
    (LinkStatus.BANNED, LinkTrigger.REGENERATE): LinkStatus.ACTIVE,
    (LinkStatus.CLOSED_BY_PROVIDER, LinkTrigger.REGENERATE): LinkStatus.ACTIVE,
    (LinkStatus.EXPIRED, LinkTrigger.REGENERATE): LinkStatus.ACTIVE,
    # Expiry sweep
    (LinkStatus.ACTIVE, LinkTrigger.EXPIRE): LinkStatus.EXPIRED,
    # Reissue for an existing code replaces its URL in place
    (LinkStatus.ACTIVE, LinkTrigger.SUPERSEDE): LinkStatus.ACTIVE,
    (LinkStatus.USED, LinkTrigger.SUPERSEDE): LinkStatus.ACTIVE,
    (LinkStatus.EXPIRED, LinkTrigger.SUPERSEDE): LinkStatus.ACTIVE,
    (LinkStatus.REVOKED, LinkTrigger.SUPERSEDE): LinkStatus.ACTIVE,
    (LinkStatus.CLOSED_BY_PROVIDER, LinkTrigger.SUPERSEDE): LinkStatus.ACTIVE,
}


def next_status(current: LinkStatus, trigger: LinkTrigger) -> LinkStatus:
    """Resolve the target status of a trigger.

    Args:
        current: Current link status
        trigger: Trigger being applied

    Returns:
        Target status

    Raises:
        InvalidTransitionError: If the trigger is not defined for the status
    """
    target = TRANSITIONS.get((current, trigger))
    if target is None:
        raise InvalidTransitionError(current.value, trigger.value)
    return target


def source_statuses(trigger: LinkTrigger) -> frozenset[LinkStatus]:
    """Statuses a trigger may be applied from."""
    return frozenset(
        status for (status, t) in TRANSITIONS if t == trigger
    )
