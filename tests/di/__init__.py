"""Test doubles for the mockable DI components.

Importing this package registers the mock provider subclasses, which is
what lets ``build_test_container`` find them.
"""

from .persistence import MockPersistenceProvider
from .telegram import MockTelegramProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockTelegramProvider",
    "build_test_container",
]
