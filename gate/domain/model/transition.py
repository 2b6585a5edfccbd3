"""Result of a lifecycle transition."""

from typing import Optional

from gate.domain.model.common import DomainModel
from gate.domain.model.invite_link import InviteLink
from gate.domain.value import RemoteOutcome


class TransitionResult(DomainModel):
    """Outcome of a transition that may involve the messaging provider.

    The local ledger is authoritative: local_committed can be True while the
    remote outcome is a warning or unknown.
    """

    link: InviteLink
    local_committed: bool = True
    remote_outcome: RemoteOutcome = RemoteOutcome.OK
    remote_detail: Optional[str] = None
