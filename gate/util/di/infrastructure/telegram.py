"""Telegram infrastructure providers."""

from dishka import Scope, provide

from gate.adapter.telegram.client import RealTelegramGateway, TelegramGateway
from gate.config import TelegramSettings
from gate.domain.service import MessagingGateway
from gate.util.di.base import ProviderBase
from gate.util.error import ConfigurationError


class TelegramProvider(ProviderBase):
    """Telegram component base."""

    __mock_component__ = "telegram"


class ProdTelegramProvider(TelegramProvider):
    """Production Telegram provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_telegram_gateway(
        self, telegram_settings: TelegramSettings
    ) -> TelegramGateway:
        """Provide Telegram Bot API gateway.

        Returns:
            Telegram gateway

        Raises:
            ConfigurationError: If the bot token is not configured
        """
        if not telegram_settings.bot_token:
            raise ConfigurationError("TELEGRAM__BOT_TOKEN")

        return RealTelegramGateway(
            bot_token=telegram_settings.bot_token,
            api_base_url=telegram_settings.api_base_url,
            timeout_seconds=telegram_settings.timeout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_messaging_gateway(self, gateway: TelegramGateway) -> MessagingGateway:
        """Expose the Telegram gateway as the domain's messaging gateway."""
        return gateway
