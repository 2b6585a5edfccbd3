"""Telegram webhook route."""

import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from gate.adapter.telegram import TelegramUpdate
from gate.application.usecase.membership import (
    ReconcileUpdateResponse,
    ReconcileUpdateUseCase,
)
from gate.config import WebhookSettings
from gate.domain.error import UnauthorizedError

router = APIRouter(prefix="/webhook", tags=["webhook"], route_class=DishkaRoute)


@router.post("/telegram", response_model=ReconcileUpdateResponse)
async def telegram_webhook(
    update: TelegramUpdate,
    reconcile_update_use_case: FromDishka[ReconcileUpdateUseCase],
    webhook_settings: FromDishka[WebhookSettings],
    secret_token: str | None = Header(
        default=None, alias="X-Telegram-Bot-Api-Secret-Token"
    ),
) -> ReconcileUpdateResponse:
    """Receive a Telegram update.

    Telegram delivers at least once; redelivered updates are no-ops.

    Args:
        update: Raw Telegram update
        reconcile_update_use_case: Reconcile update use case from DI
        webhook_settings: Webhook settings from DI
        secret_token: Secret token Telegram echoes from setWebhook

    Returns:
        Acknowledgement with the reconciliation outcome

    Raises:
        UnauthorizedError: If a secret is configured and does not match
    """
    expected = webhook_settings.secret_token
    if expected and not secrets.compare_digest(secret_token or "", expected):
        raise UnauthorizedError("Invalid webhook secret")

    return await reconcile_update_use_case.execute(update)
