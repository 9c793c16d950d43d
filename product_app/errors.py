"""
Error taxonomy shared by the stores, the services and the HTTP layer.

Callers distinguish failures by `kind`; the message text is what ends up in the
`error_description` of an HTTP error response.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kind of failure an operation can report."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class ProductAppError(Exception):
    """Base class for every failure raised by the core."""

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ProductAppError):
    """A business rule was violated; the caller can correct the input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(ProductAppError):
    """The requested record does not exist (or there was nothing to act on)."""

    kind = ErrorKind.NOT_FOUND


class PersistenceError(ProductAppError):
    """The underlying store call failed. The original fault is chained as __cause__."""

    kind = ErrorKind.PERSISTENCE
