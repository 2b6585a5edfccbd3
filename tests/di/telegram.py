"""Mock Telegram providers for testing."""

from dishka import Scope, provide

from gate.adapter.telegram.client import MockTelegramGateway, TelegramGateway
from gate.domain.service import MessagingGateway
from gate.util.di.infrastructure.telegram import TelegramProvider


class MockTelegramProvider(TelegramProvider):
    """Mock Telegram provider using the recording mock gateway."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_telegram_gateway(self) -> TelegramGateway:
        """Provide mock Telegram gateway."""
        return MockTelegramGateway()

    @provide(scope=Scope.APP)
    def get_messaging_gateway(self, gateway: TelegramGateway) -> MessagingGateway:
        """Expose the mock as the domain's messaging gateway."""
        return gateway
