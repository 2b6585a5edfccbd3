"""Auth use cases."""

from gate.application.usecase.auth.verify_code import (
    VerifyCodeRequest,
    VerifyCodeResponse,
    VerifyCodeUseCase,
)

__all__ = [
    "VerifyCodeRequest",
    "VerifyCodeResponse",
    "VerifyCodeUseCase",
]
