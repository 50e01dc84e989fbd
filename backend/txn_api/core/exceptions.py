"""Exceptions raised by the transaction service.

Each exception carries an ErrorKind from errors.py; the API layer turns
it into a status code and response body.
"""
from typing import Any

from txn_api.core.errors import ErrorKind, get_error


class TransactionServiceError(Exception):
    """Base exception for transaction service failures.

    Attributes:
        kind: Error kind from the catalog
        message: Public message shown to the caller
        details: Additional context for logging only
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or get_error(self.kind)["message"]
        self.details = details or {}
        super().__init__(self.message)

    @property
    def http_status(self) -> int:
        return get_error(self.kind)["http_status"]


class NotFoundError(TransactionServiceError):
    """A lookup or delete matched zero rows."""

    kind = ErrorKind.NOT_FOUND


class StoreFailureError(TransactionServiceError):
    """Any unexpected failure talking to the relational store.

    The original driver error stays in ``details["error"]`` and on
    ``__cause__``; it is logged but never returned to the client.
    """

    kind = ErrorKind.STORE_FAILURE
