"""Dependency injection module.

Providers are grouped by layer. Config, domain and application providers
are concrete; infrastructure providers (database, Telegram) have a
production and a mock implementation each.
"""

from gate.util.di.application import ProdApplicationProvider
from gate.util.di.base import Component, ProviderBase
from gate.util.di.core import ProdConfigProvider
from gate.util.di.domain import ProdDomainProvider
from gate.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdTelegramProvider,
    TelegramProvider,
)

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    TelegramProvider,
    PersistenceProvider,
]

MOCKABLE_COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__
    for base in PROVIDERS
    if base.__mock_component__ is not None
)

__all__ = [
    "Component",
    "MOCKABLE_COMPONENTS",
    "ProviderBase",
    "PROVIDERS",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "TelegramProvider",
    "ProdPersistenceProvider",
    "ProdTelegramProvider",
]
