"""Mock providers for testing.

Importing this package registers the mock implementations of every
mockable component.
"""

from .container import build_test_container
from .persistence import MockPersistenceProvider
from .telegram import MockTelegramProvider

__all__ = [
    "MockPersistenceProvider",
    "MockTelegramProvider",
    "build_test_container",
]
