"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from gate.util.di import Component, build_providers, mockable_components


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked by default.

    Settings come from the environment; with ``persistence`` unmocked the
    repositories talk to PostgreSQL at DATABASE__URL.

    Args:
        unmock: Components to take from their production implementation

    Returns:
        Configured test container

    Raises:
        ValueError: If ``unmock`` names an unknown component

    Examples:
        # Unit tests: in-memory repositories, recording Telegram gateway
        container = build_test_container()

        # Integration tests: PostgreSQL, recording Telegram gateway
        container = build_test_container(unmock={"persistence"})
    """
    unmock = set(unmock or ())
    components = mockable_components()

    unknown = unmock - components
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = build_providers(mocked=components - unmock)
    return make_async_container(*providers, FastapiProvider())
