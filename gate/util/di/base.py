"""Provider base class and component names."""

from typing import ClassVar, Literal, Optional, Type

from dishka import Provider

# Components that tests may swap for in-memory / recording doubles
Component = Literal["telegram", "persistence"]


class ProviderBase(Provider):
    """Common base of every provider in ``PROVIDERS``.

    A provider listed in ``PROVIDERS`` is either concrete (used as is) or
    the base of a component: it names the component in
    ``__mock_component__`` and has one production and one mock subclass,
    told apart by ``__is_mock__``.
    """

    __mock_component__: ClassVar[Optional[Component]] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_component(cls) -> bool:
        """Whether implementations are chosen among subclasses."""
        return cls.__mock_component__ is not None and bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool) -> Type["ProviderBase"]:
        """Pick the provider class to instantiate.

        Args:
            use_mock: Select the mock subclass instead of the production one

        Returns:
            Provider class (not instantiated)

        Raises:
            ValueError: If the component lacks the requested implementation
        """
        if not cls.is_component():
            return cls

        for subclass in cls.__subclasses__():
            if subclass.__is_mock__ == use_mock:
                return subclass

        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {cls.__mock_component__}")
