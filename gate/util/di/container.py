"""Dependency injection container."""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from gate.util.di import PROVIDERS, Component


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build the DI container.

    Settings are loaded from environment variables when first resolved.

    Args:
        mocked: Components served by their mock providers; production
            implementations are used for everything else

    Returns:
        Container that also backs FastAPI request scopes
    """
    providers = [
        base.implementation(use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the application.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container=container, app=app)
