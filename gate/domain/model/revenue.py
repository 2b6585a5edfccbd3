"""Revenue record entity."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import AccessCode, InviteLinkId, RevenueId


class RevenueRecord(DomainModel):
    """Price paid for a link, keyed by its access code."""

    id: RevenueId
    access_code: AccessCode
    amount: Decimal = Field(ge=0)
    link_id: Optional[InviteLinkId] = None
    created_by: str
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
