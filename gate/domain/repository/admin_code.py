"""Admin code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gate.domain.model import AdminCode
from gate.domain.value import AccessCode


class AdminCodeRepository(ABC):
    """Repository for AdminCode entity."""

    @abstractmethod
    async def find_by_code(self, code: AccessCode) -> AdminCode | None:
        """Find an admin code record by its code.

        Args:
            code: Normalized access code

        Returns:
            The admin code record if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, admin_code: AdminCode) -> AdminCode:
        """Save an admin code record (create or update).

        Args:
            admin_code: The record to save

        Returns:
            The saved record
        """
        pass

    @abstractmethod
    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp the last time the code was used to sign in.

        Args:
            code: Admin access code
            at: Timestamp to record
        """
        pass
