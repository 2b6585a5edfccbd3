"""In-memory audit log repository for testing."""

from gate.domain.model import AuditLogEntry
from gate.domain.repository import AuditLogRepository
from gate.domain.value import EntityType

from .store import InMemoryStore


class InMemoryAuditLogRepository(AuditLogRepository):
    """In-memory implementation of AuditLogRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Append an entry."""
        self._store.audit_logs.append(entry)
        return entry

    async def find_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[AuditLogEntry]:
        """List entries about an entity, oldest first."""
        return [
            entry
            for entry in self._store.audit_logs
            if entry.entity_type == entity_type and entry.entity_id == entity_id
        ]

    async def exists_for_update(self, update_id: int) -> bool:
        """Check whether an entry records the provider update id."""
        return any(
            entry.details.get("update_id") == update_id
            for entry in self._store.audit_logs
        )
