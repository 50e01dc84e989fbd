"""Error kinds and the public messages returned for them.

Clients only ever see the catalog entry for a kind. The underlying cause
(database driver text, SQL, bound parameters) goes to the logs.
"""
from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    """Failure categories surfaced to API callers."""

    NOT_FOUND = "NOT_FOUND"
    STORE_FAILURE = "STORE_FAILURE"
    INVALID_REQUEST = "INVALID_REQUEST"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL = "INTERNAL"


ERROR_CATALOG: dict[ErrorKind, dict] = {
    ErrorKind.NOT_FOUND: {
        "http_status": status.HTTP_404_NOT_FOUND,
        "message": "Transaction not found",
    },
    ErrorKind.STORE_FAILURE: {
        "http_status": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "message": "Transaction store is unavailable",
    },
    ErrorKind.INVALID_REQUEST: {
        "http_status": status.HTTP_400_BAD_REQUEST,
        "message": "Invalid request",
    },
    ErrorKind.ROUTE_NOT_FOUND: {
        "http_status": status.HTTP_404_NOT_FOUND,
        "message": "Not found",
    },
    ErrorKind.METHOD_NOT_ALLOWED: {
        "http_status": status.HTTP_405_METHOD_NOT_ALLOWED,
        "message": "Method not allowed",
    },
    ErrorKind.INTERNAL: {
        "http_status": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "message": "Internal server error",
    },
}


def get_error(kind: ErrorKind) -> dict:
    """Get the catalog entry for an error kind."""
    return ERROR_CATALOG[kind]


def error_body(kind: ErrorKind, message: str | None = None) -> dict:
    """Build the JSON body for an error response.

    Args:
        kind: Error kind from the catalog
        message: Public message overriding the catalog default

    Returns:
        Dict with ``error`` and ``error_code`` keys
    """
    return {
        "error": message or get_error(kind)["message"],
        "error_code": kind.value,
    }
