"""Audit log repository interface."""

from abc import ABC, abstractmethod

from gate.domain.model import AuditLogEntry
from gate.domain.value import EntityType


class AuditLogRepository(ABC):
    """Append-only repository for audit entries."""

    @abstractmethod
    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an entry.

        Args:
            entry: The entry to store

        Returns:
            The stored entry
        """
        pass

    @abstractmethod
    async def find_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[AuditLogEntry]:
        """List entries about an entity, oldest first."""
        pass

    @abstractmethod
    async def exists_for_update(self, update_id: int) -> bool:
        """Check whether an entry records the given provider update id.

        Used to recognise re-delivered webhook updates.
        """
        pass
