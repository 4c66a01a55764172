"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass carries a stable ``kind`` that callers can map to a response.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "error"


class ValidationError(DomainException):
    """A business rule or invariant was violated, or an argument is malformed."""

    kind = "invalid_argument"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"


class ConflictError(DomainException):
    """A uniqueness constraint would be violated."""

    kind = "conflict"


class StoreUnavailableError(DomainException):
    """The underlying document store could not be read or written."""

    kind = "unavailable"
