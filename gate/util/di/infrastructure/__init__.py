"""Infrastructure providers.

Production subclasses are imported here so that component bases can find
them through ``__subclasses__()``; mocks register from ``tests.di``.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider
from .telegram import ChannelGatewayProvider, ProdTelegramProvider, TelegramProvider

__all__ = [
    "ChannelGatewayProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdTelegramProvider",
    "TelegramProvider",
]
