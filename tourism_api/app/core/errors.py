"""
Service‑level exceptions.

Services raise these instead of ``HTTPException`` so they stay usable
outside a request.  Every class derives from ``ValueError``; endpoints
catch the specific subclass and translate it into the matching HTTP
status code.
"""


class ServiceError(ValueError):
    """Base class for expected, user‑visible failures."""


class InvalidIdError(ServiceError):
    """The supplied identifier is not a valid document id."""

    def __init__(self, value: str):
        super().__init__("Invalid ID format")
        self.value = value


class NotFoundError(ServiceError):
    """The requested document does not exist."""


class ConflictError(ServiceError):
    """The request clashes with the current state of the store."""


class AlreadyExistsError(ConflictError):
    """A document with the same unique key already exists."""


class InvalidTransitionError(ConflictError):
    """A booking status change is not allowed from the current status."""


class RoleUpdateConflictError(ConflictError):
    """Accepting a guide application did not update any user record."""


class PaymentProviderError(ServiceError):
    """The external payment provider failed or was unreachable."""
