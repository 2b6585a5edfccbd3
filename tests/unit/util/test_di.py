"""Tests for provider selection and container wiring."""

import pytest

from gate.adapter.telegram.client import MockTelegramGateway, TelegramGateway
from gate.domain.service import MessagingGateway
from gate.util.di import PersistenceProvider, ProdConfigProvider, TelegramProvider
from gate.util.di.container import create_container
from gate.util.di.infrastructure import ProdPersistenceProvider, ProdTelegramProvider
from gate.util.error import ConfigurationError
from tests.di import MockPersistenceProvider, MockTelegramProvider, build_test_container


class TestProviderImplementation:
    """Tests for ProviderBase.implementation."""

    def test_concrete_provider_is_used_as_is(self):
        assert ProdConfigProvider.implementation(use_mock=True) is ProdConfigProvider

    def test_mockable_provider_selects_by_flag(self):
        assert PersistenceProvider.implementation() is ProdPersistenceProvider
        assert PersistenceProvider.implementation(use_mock=True) is MockPersistenceProvider
        assert TelegramProvider.implementation(use_mock=True) is MockTelegramProvider
        assert TelegramProvider.implementation() is ProdTelegramProvider


class TestContainers:
    """Tests for container construction."""

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError):
            build_test_container(unmock={"discord"})

    @pytest.mark.asyncio
    async def test_test_container_serves_mock_gateway(self):
        container = build_test_container()

        gateway = await container.get(MessagingGateway)

        assert isinstance(gateway, MockTelegramGateway)
        assert gateway is await container.get(TelegramGateway)
        await container.close()

    @pytest.mark.asyncio
    async def test_production_gateway_requires_bot_token(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM__BOT_TOKEN", "")
        container = create_container(mocked={"persistence"})

        with pytest.raises(ConfigurationError) as exc_info:
            await container.get(TelegramGateway)

        assert exc_info.value.setting == "TELEGRAM__BOT_TOKEN"
        await container.close()
