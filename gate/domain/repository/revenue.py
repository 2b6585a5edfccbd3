"""Revenue repository interface."""

from abc import ABC, abstractmethod

from gate.domain.model import RevenueRecord
from gate.domain.value import AccessCode


class RevenueRepository(ABC):
    """Repository for RevenueRecord entity."""

    @abstractmethod
    async def save(self, record: RevenueRecord) -> RevenueRecord:
        """Store a revenue record."""
        pass

    @abstractmethod
    async def find_by_access_code(self, code: AccessCode) -> list[RevenueRecord]:
        """List revenue records tied to an access code."""
        pass

    @abstractmethod
    async def delete_by_access_code(self, code: AccessCode) -> int:
        """Purge the revenue records tied to an access code.

        Returns:
            Number of records removed
        """
        pass
