"""Strongly typed identifiers for gate domain entities."""

from typing import NewType
from uuid import UUID

InviteLinkId = NewType("InviteLinkId", UUID)
AdminCodeId = NewType("AdminCodeId", UUID)
ResellerId = NewType("ResellerId", UUID)
AuditLogId = NewType("AuditLogId", UUID)
RevenueId = NewType("RevenueId", UUID)
