"""In-memory revenue repository for testing."""

from gate.domain.model import RevenueRecord
from gate.domain.repository import RevenueRepository
from gate.domain.value import AccessCode

from .store import InMemoryStore


class InMemoryRevenueRepository(RevenueRepository):
    """In-memory implementation of RevenueRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, record: RevenueRecord) -> RevenueRecord:
        """Store a revenue record."""
        self._store.revenue.append(record)
        return record

    async def find_by_access_code(self, code: AccessCode) -> list[RevenueRecord]:
        """List revenue records of a code."""
        return [r for r in self._store.revenue if r.access_code == code]

    async def delete_by_access_code(self, code: AccessCode) -> int:
        """Purge the revenue records of a code."""
        kept = [r for r in self._store.revenue if r.access_code != code]
        purged = len(self._store.revenue) - len(kept)
        self._store.revenue[:] = kept
        return purged
