"""Domain layer errors.

Every error carries a ``kind`` tag; the interface layer maps kinds to
transport responses without looking at the concrete class.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "internal"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Raised when a code does not resolve to any identity."""

    kind = "unauthorized"

    def __init__(self, message: str = "Invalid access code"):
        super().__init__(message)


class BannedError(DomainError):
    """Raised when a code belongs to a banned link or an inactive reseller."""

    kind = "banned"

    def __init__(self, message: str = "Access code is banned"):
        super().__init__(message)


class InsufficientScopeError(DomainError):
    """Raised when an identity lacks the capability for an action."""

    kind = "insufficient_scope"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Not permitted to {action}")


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "validation"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InsufficientCreditError(DomainError):
    """Raised when a reseller has no credit left for an issuance."""

    kind = "insufficient_credit"

    def __init__(self, reseller_code: str, requested: int):
        self.reseller_code = reseller_code
        self.requested = requested
        super().__init__(
            f"Reseller {reseller_code} has insufficient credit for {requested} link(s)"
        )


class InvalidTransitionError(DomainError):
    """Raised when a trigger is not defined for a link's current status."""

    kind = "invalid_transition"

    def __init__(self, status: str, trigger: str):
        self.status = status
        self.trigger = trigger
        super().__init__(f"Cannot apply '{trigger}' to a link in status '{status}'")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""

    kind = "conflict"


class GatewayUnavailableError(DomainError):
    """Raised when an operation cannot complete without the messaging provider."""

    kind = "gateway_unavailable"
