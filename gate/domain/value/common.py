"""Base class for single-value value objects."""

from typing import Generic, Optional, TypeVar

from pydantic import ConfigDict, RootModel, ValidationError

T = TypeVar("T")
V = TypeVar("V", bound="RootValueObject")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive.

    Compared and hashed by value; ``.root`` holds the primitive.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls: type[V], raw: T) -> Optional[V]:
        """Build the value object, or return None if ``raw`` is invalid."""
        try:
            return cls(raw)
        except ValidationError:
            return None

    def __str__(self) -> str:
        return str(self.root)
