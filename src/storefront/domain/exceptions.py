"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map them to
user-facing messages and status codes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or incomplete, or an invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A uniqueness or membership constraint would be violated."""


class StockError(DomainException):
    """Not enough inventory to satisfy a request."""

    def __init__(self, message: str, product_name: str | None = None) -> None:
        super().__init__(message)
        self.product_name = product_name
