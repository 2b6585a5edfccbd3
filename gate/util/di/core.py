"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from gate.config import (
    AccessCodeSettings,
    ReconcilerSettings,
    Settings,
    TelegramSettings,
    WebhookSettings,
)
from gate.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_telegram_settings(self, settings: Settings) -> TelegramSettings:
        """Provide Telegram settings."""
        return settings.telegram

    @provide(scope=Scope.APP)
    def provide_reconciler_settings(self, settings: Settings) -> ReconcilerSettings:
        """Provide reconciler settings."""
        return settings.reconciler

    @provide(scope=Scope.APP)
    def provide_webhook_settings(self, settings: Settings) -> WebhookSettings:
        """Provide webhook settings."""
        return settings.webhook

    @provide(scope=Scope.APP)
    def provide_access_code_settings(self, settings: Settings) -> AccessCodeSettings:
        """Provide access code settings."""
        return settings.access_codes
