"""In-memory admin code repository for testing."""

from datetime import datetime
from typing import Optional

from gate.domain.model import AdminCode
from gate.domain.repository import AdminCodeRepository
from gate.domain.value import AccessCode

from .store import InMemoryStore


class InMemoryAdminCodeRepository(AdminCodeRepository):
    """In-memory implementation of AdminCodeRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_code(self, code: AccessCode) -> Optional[AdminCode]:
        """Find an admin code record by code."""
        return self._store.admin_codes.get(code.root)

    async def save(self, admin_code: AdminCode) -> AdminCode:
        """Save an admin code record."""
        self._store.admin_codes[admin_code.code.root] = admin_code
        return admin_code

    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp last_used_at."""
        admin_code = self._store.admin_codes.get(code.root)
        if admin_code:
            self._store.admin_codes[code.root] = admin_code.model_copy(
                update={"last_used_at": at}
            )
