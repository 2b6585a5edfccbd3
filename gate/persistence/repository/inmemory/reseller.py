"""In-memory reseller repository for testing."""

from datetime import datetime
from typing import Optional

from gate.domain.model import Reseller
from gate.domain.repository import ResellerRepository
from gate.domain.value import AccessCode

from .store import InMemoryStore


class InMemoryResellerRepository(ResellerRepository):
    """In-memory implementation of ResellerRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_code(self, code: AccessCode) -> Optional[Reseller]:
        """Find a reseller by code."""
        return self._store.resellers.get(code.root)

    async def save(self, reseller: Reseller) -> Reseller:
        """Save a reseller, keeping the stored balance on update."""
        existing = self._store.resellers.get(reseller.code.root)
        if existing:
            reseller = reseller.model_copy(update={"credits": existing.credits})
        self._store.resellers[reseller.code.root] = reseller
        return reseller

    async def try_debit(self, code: AccessCode, amount: int) -> Optional[int]:
        """Decrement credits if the balance covers the amount."""
        reseller = self._store.resellers.get(code.root)
        if reseller is None or reseller.credits < amount:
            return None
        updated = reseller.model_copy(update={"credits": reseller.credits - amount})
        self._store.resellers[code.root] = updated
        return updated.credits

    async def credit(self, code: AccessCode, amount: int) -> Optional[int]:
        """Increment credits."""
        reseller = self._store.resellers.get(code.root)
        if reseller is None:
            return None
        updated = reseller.model_copy(update={"credits": reseller.credits + amount})
        self._store.resellers[code.root] = updated
        return updated.credits

    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp last_used_at."""
        reseller = self._store.resellers.get(code.root)
        if reseller:
            self._store.resellers[code.root] = reseller.model_copy(
                update={"last_used_at": at}
            )
