"""Telegram infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
from dishka import Scope, provide

from gate.adapter.telegram import RealTelegramGateway, TelegramGateway
from gate.config import Settings
from gate.domain.service import ChannelGateway
from gate.util.di.base import ProviderBase
from gate.util.error import ConfigurationError
from gate.util.observability import instrument_httpx


class TelegramProvider(ProviderBase):
    """Telegram component base."""

    __mock_component__ = "telegram"


class ProdTelegramProvider(TelegramProvider):
    """Production Telegram provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, settings: Settings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client, closed with the container."""
        client = httpx.AsyncClient(timeout=settings.telegram.request_timeout_seconds)
        instrument_httpx(client)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_telegram_gateway(
        self, client: httpx.AsyncClient, settings: Settings
    ) -> TelegramGateway:
        """Provide Telegram gateway.

        Raises:
            ConfigurationError: If the bot token or admin id is not configured
        """
        if settings.telegram.bot_token == "CHANGE_ME_IN_PRODUCTION":
            raise ConfigurationError("TELEGRAM__BOT_TOKEN")
        if not settings.telegram.admin_id:
            raise ConfigurationError("TELEGRAM__ADMIN_ID")

        return RealTelegramGateway(
            client=client,
            bot_url=settings.telegram.bot_url,
            request_timeout=settings.telegram.request_timeout_seconds,
        )


class ChannelGatewayProvider(ProviderBase):
    """Exposes the Telegram gateway through the domain interface."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_channel_gateway(self, telegram_gateway: TelegramGateway) -> ChannelGateway:
        """Provide the channel gateway used by domain services."""
        return telegram_gateway
