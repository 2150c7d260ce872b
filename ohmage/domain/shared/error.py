"""Error hierarchy for ohmage.

Error layers:
- OhmageError: Base class for all ohmage errors
- DomainError: Rejected input, missing resources, denied access (4xx responses)
- InfrastructureError: Storage or configuration failures (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class OhmageError(Exception):
    """Base class for all ohmage errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(OhmageError):
    """Base class for domain/business errors."""


class InvalidInputError(DomainError):
    """Uploaded or requested data is malformed or contradictory.

    The underlying parse failure, if any, is chained as ``__cause__``.
    """

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "INVALID_INPUT")
        self.field = field


class NotFoundError(DomainError):
    """Resource not found."""


class AuthorizationError(DomainError):
    """User not authorized for this operation."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(OhmageError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
