"""Dependency injection module."""

from typing import Collection, Type

from gate.util.di.application import ProdApplicationProvider
from gate.util.di.base import Component, ProviderBase
from gate.util.di.core import ProdConfigProvider
from gate.util.di.domain import ProdDomainProvider
from gate.util.di.infrastructure import (
    ChannelGatewayProvider,
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdTelegramProvider,
    TelegramProvider,
)

# Order follows the layers; component bases resolve to one subclass each
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    TelegramProvider,
    PersistenceProvider,
    ChannelGatewayProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {p.__mock_component__ for p in PROVIDERS if p.is_component()}


def build_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per ``PROVIDERS`` entry.

    Args:
        mocked: Components to take from their mock implementation

    Returns:
        Provider instances ready for ``make_async_container``
    """
    return [
        base.implementation(use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ChannelGatewayProvider",
    "PersistenceProvider",
    "TelegramProvider",
    "ProdPersistenceProvider",
    "ProdTelegramProvider",
]
