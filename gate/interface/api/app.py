"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gate.config import Settings
from gate.interface.api.routes import auth, health, links, resellers, webhook
from gate.interface.error import register_error_handlers
from gate.util.di.container import create_container, setup_di
from gate.util.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire has to be configured first: by scripts/start_app.py in
    production and by tests/conftest.py in tests.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Gate API",
        description="Access-code controlled Telegram invite links for resellers and admins",
        version=SERVICE_VERSION,
    )

    instrument_fastapi(app_instance)

    # Browser dashboards send the code in X-Access-Code; no cookies are used
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Access-Code"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    for routes in (health, auth, links, resellers, webhook):
        app_instance.include_router(routes.router)

    return app_instance


# Module-level instance served by uvicorn
app = create_app()
