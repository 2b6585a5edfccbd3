"""Reseller use cases."""

from gate.application.usecase.reseller.add_credits import (
    AddCreditsRequest,
    AddCreditsResponse,
    AddCreditsUseCase,
)

__all__ = [
    "AddCreditsRequest",
    "AddCreditsResponse",
    "AddCreditsUseCase",
]
