"""Configuration providers."""

from dishka import Scope, provide

from gate.config import Settings
from gate.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings, read once per container from the environment and ``.env``."""

    scope = Scope.APP

    @provide
    def get_settings(self) -> Settings:
        return Settings()
