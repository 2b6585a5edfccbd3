"""Observability configuration using Logfire.

Services open one span per operation, named ``<service>.<operation>``,
and log with structured attributes:

    with logfire.span("link_service.ban", link_id=str(link_id)):
        ...
        logfire.info("Link banned", link_id=str(link.id))
"""

import re
from uuid import UUID

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from gate.config import Settings

SERVICE_NAME = "gate-api"
SERVICE_VERSION = "0.1.0"


def scrubbing_options(settings: Settings) -> logfire.ScrubbingOptions:
    """Scrub the Telegram secrets from spans and logs.

    The bot token is embedded in every Bot API URL, which the httpx
    instrumentation records as a span attribute.
    """
    secrets = [settings.telegram.bot_token, settings.webhook.secret_token]
    return logfire.ScrubbingOptions(
        extra_patterns=[re.escape(secret) for secret in secrets if secret]
    )


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled when a token is present unless
    OBSERVABILITY__SEND_TO_LOGFIRE says otherwise.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        token=observability.logfire_token,
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        scrubbing=scrubbing_options(settings),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        telegram_configured=bool(settings.telegram.bot_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Headers are not captured: the access code travels in X-Access-Code.
    Health checks are not traced.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        # Path and query values only: bodies carry client metadata and the
        # access_code dependency carries the caller's credential
        values = {
            name: value
            for name, value in attributes.get("values", {}).items()
            if name != "access_code" and isinstance(value, (str, int, UUID))
        }
        result = {"method": request.method, "path": request.url.path, **values}
        if attributes.get("errors"):
            result["errors"] = attributes["errors"]
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls="/health",
        request_attributes_mapper=_map_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Instrument outbound Bot API calls with Logfire."""
    logfire.instrument_httpx()
