"""Request dependencies shared by the routers."""

from fastapi import Header

from gate.domain.error import UnauthorizedError


def access_code_header(
    x_access_code: str | None = Header(default=None, alias="X-Access-Code"),
) -> str:
    """Read the caller's access code.

    Raises:
        UnauthorizedError: If the header is missing or blank
    """
    if not x_access_code or not x_access_code.strip():
        raise UnauthorizedError("Missing access code")
    return x_access_code
