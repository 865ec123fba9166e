"""Typed errors for failed invoice writes."""

from enum import Enum

import psycopg2
import psycopg2.errors
import psycopg2.pool


class StoreErrorKind(str, Enum):
    """Why a statement against the store failed."""

    CONSTRAINT = "constraint"
    TIMEOUT = "timeout"
    CONNECTIVITY = "connectivity"
    INVALID_DATA = "invalid_data"
    UNKNOWN = "unknown"


# Statement or lock timeouts surface as OperationalError subclasses
_TIMEOUT_ERRORS = (psycopg2.errors.QueryCanceled, psycopg2.errors.LockNotAvailable)


def classify_store_error(exc: Exception) -> StoreErrorKind:
    """Map a psycopg2 exception onto a StoreErrorKind."""
    if isinstance(exc, psycopg2.IntegrityError):
        return StoreErrorKind.CONSTRAINT
    if isinstance(exc, _TIMEOUT_ERRORS):
        return StoreErrorKind.TIMEOUT
    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError, psycopg2.pool.PoolError)):
        return StoreErrorKind.CONNECTIVITY
    if isinstance(exc, psycopg2.DataError):
        return StoreErrorKind.INVALID_DATA
    return StoreErrorKind.UNKNOWN


class StoreError(Exception):
    """
    A single invoice write failed.

    The original psycopg2 exception is chained as __cause__.
    """

    def __init__(self, operation: str, kind: StoreErrorKind):
        self.operation = operation
        self.kind = kind
        super().__init__(f"{operation} failed ({kind.value})")

    @classmethod
    def from_exception(cls, operation: str, exc: Exception) -> "StoreError":
        return cls(operation, classify_store_error(exc))
