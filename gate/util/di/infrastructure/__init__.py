"""Infrastructure providers.

Production implementations are imported here so ``implementation()`` can
find them among the component's subclasses.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider
from .telegram import ProdTelegramProvider, TelegramProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdTelegramProvider",
    "TelegramProvider",
]
