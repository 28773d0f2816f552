"""Mock Telegram providers for testing."""

from dishka import Scope, provide

from gate.adapter.telegram import MockTelegramGateway, TelegramGateway
from gate.util.di.infrastructure.telegram import TelegramProvider


class MockTelegramProvider(TelegramProvider):
    """Mock Telegram provider recording gateway calls."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_telegram_gateway(self) -> TelegramGateway:
        """Provide mock Telegram gateway."""
        return MockTelegramGateway()
