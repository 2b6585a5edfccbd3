"""Reconcile webhook update use case."""

import logfire
from pydantic import BaseModel

from gate.adapter.telegram.update import TelegramUpdate, to_membership_event
from gate.application.usecase.base import BaseUseCase
from gate.domain.service import ReconcileOutcome, ReconcilerService


class ReconcileUpdateResponse(BaseModel):
    """Webhook acknowledgement."""

    ok: bool = True
    outcome: ReconcileOutcome


class ReconcileUpdateUseCase(
    BaseUseCase[TelegramUpdate, ReconcileUpdateResponse]
):
    """Use case for one inbound Telegram update.

    Updates other than chat_member are acknowledged and ignored so Telegram
    stops redelivering them.
    """

    def __init__(self, reconciler_service: ReconcilerService) -> None:
        """Initialize reconcile update use case.

        Args:
            reconciler_service: Membership reconciler
        """
        self.reconciler_service = reconciler_service

    async def execute(self, request: TelegramUpdate) -> ReconcileUpdateResponse:
        """Reconcile the update."""
        with logfire.span("reconcile_update.execute", update_id=request.update_id):
            event = to_membership_event(request)
            if event is None:
                logfire.info("Update ignored", update_id=request.update_id)
                return ReconcileUpdateResponse(outcome=ReconcileOutcome.IGNORED)

            outcome = await self.reconciler_service.on_membership_event(event)
            return ReconcileUpdateResponse(outcome=outcome)
