"""Reseller repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gate.domain.model import Reseller
from gate.domain.value import AccessCode


class ResellerRepository(ABC):
    """Repository for Reseller entity and its credit balance.

    Balance changes go through try_debit/credit only. Both must be single
    atomic operations against the stored balance.
    """

    @abstractmethod
    async def find_by_code(self, code: AccessCode) -> Reseller | None:
        """Find a reseller by code.

        Args:
            code: Normalized access code

        Returns:
            The reseller if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, reseller: Reseller) -> Reseller:
        """Save a reseller (create or update).

        Args:
            reseller: The reseller to save

        Returns:
            The saved reseller
        """
        pass

    @abstractmethod
    async def try_debit(self, code: AccessCode, amount: int) -> int | None:
        """Atomically decrement the balance if it covers the amount.

        Args:
            code: Reseller code
            amount: Credits to take

        Returns:
            The new balance, or None if the reseller is unknown or the
            balance is smaller than the amount
        """
        pass

    @abstractmethod
    async def credit(self, code: AccessCode, amount: int) -> int | None:
        """Atomically increment the balance.

        Args:
            code: Reseller code
            amount: Credits to add

        Returns:
            The new balance, or None if the reseller is unknown
        """
        pass

    @abstractmethod
    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp the last time the code was used to sign in."""
        pass
