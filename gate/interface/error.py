"""Interface layer error handling.

Domain errors carry a ``kind``; this module maps kinds to HTTP statuses.
Response bodies are ``{"error": kind, "message": text}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gate.domain.error import DomainError

STATUS_BY_KIND: dict[str, int] = {
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "banned": status.HTTP_403_FORBIDDEN,
    "insufficient_scope": status.HTTP_403_FORBIDDEN,
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "insufficient_credit": status.HTTP_409_CONFLICT,
    "invalid_transition": status.HTTP_409_CONFLICT,
    "conflict": status.HTTP_409_CONFLICT,
    "gateway_unavailable": status.HTTP_502_BAD_GATEWAY,
}


def error_response(kind: str, message: str, status_code: int) -> JSONResponse:
    """Build the error body."""
    return JSONResponse(
        status_code=status_code, content={"error": kind, "message": message}
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a domain error to its HTTP status."""
    status_code = STATUS_BY_KIND.get(
        exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, kind=exc.kind, error=exc.message
        )
    else:
        logfire.info(
            "Request rejected", path=request.url.path, kind=exc.kind, error=exc.message
        )
    return error_response(exc.kind, exc.message, status_code)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as validation errors."""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
    return error_response(
        "validation", message or "Invalid request", status.HTTP_400_BAD_REQUEST
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Report anything else as a generic server error."""
    logfire.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return error_response(
        "internal", "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
