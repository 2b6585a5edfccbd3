"""Membership use cases."""

from gate.application.usecase.membership.reconcile_update import (
    ReconcileUpdateResponse,
    ReconcileUpdateUseCase,
)

__all__ = [
    "ReconcileUpdateResponse",
    "ReconcileUpdateUseCase",
]
