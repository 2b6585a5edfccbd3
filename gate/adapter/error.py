"""Errors raised inside provider adapters.

Adapters translate these into the domain's GatewayError; they never reach
the interface layer.
"""


class ProviderError(Exception):
    """The provider could not be reached or gave no usable answer."""


class ProviderRejectedError(ProviderError):
    """The provider answered and refused the request.

    Attributes:
        description: Provider's explanation, e.g. "Bad Request: not enough rights"
        error_code: Provider's numeric error code, when given
    """

    def __init__(self, description: str, error_code: int | None = None):
        self.description = description
        self.error_code = error_code
        super().__init__(description)
