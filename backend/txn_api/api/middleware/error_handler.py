"""Exception handlers.

All failures are rendered as ``{"error": ..., "error_code": ...}`` with
the status from the error catalog. Underlying causes are logged here and
never sent to the client.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from txn_api.api.middleware.cors import CORS_HEADERS
from txn_api.core.errors import ErrorKind, error_body, get_error
from txn_api.core.exceptions import TransactionServiceError

logger = logging.getLogger(__name__)


def _error_response(kind: ErrorKind, message: str | None = None, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=get_error(kind)["http_status"],
        content=error_body(kind, message),
        headers=headers,
    )


def _request_extra(request: Request, **extra) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "method": request.method,
        **extra,
    }


async def handle_service_error(request: Request, exc: TransactionServiceError) -> JSONResponse:
    """Handle NotFoundError / StoreFailureError raised by the service layer.

    This is the only place service failures are logged.
    """
    level = logging.WARNING if exc.kind is ErrorKind.NOT_FOUND else logging.ERROR
    extra = _request_extra(request, error_code=exc.kind.value)
    if request.app.state.settings.debug:
        extra["details"] = exc.details
    logger.log(level, f"{exc.kind.value} on {request.url.path}: {exc.details}", extra=extra)

    return _error_response(exc.kind, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors.

    A path parameter that does not parse as an id cannot match any row,
    so it is reported as not found rather than as a bad request.
    """
    errors = exc.errors()
    if any((error.get("loc") or ("",))[0] == "path" for error in errors):
        logger.warning(
            f"Malformed path parameter on {request.url.path}",
            extra=_request_extra(request, error_code=ErrorKind.NOT_FOUND.value),
        )
        return _error_response(ErrorKind.NOT_FOUND)

    messages = []
    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        messages.append(f"{field}: {error.get('msg', 'Invalid value')}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra=_request_extra(request, error_code=ErrorKind.INVALID_REQUEST.value),
    )
    return _error_response(ErrorKind.INVALID_REQUEST, " | ".join(messages))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render router fallthrough (unknown path, wrong method) in the error shape."""
    if exc.status_code == 404:
        return _error_response(ErrorKind.ROUTE_NOT_FOUND, headers=exc.headers)
    if exc.status_code == 405:
        return _error_response(ErrorKind.METHOD_NOT_ALLOWED, headers=exc.headers)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "error_code": ErrorKind.INVALID_REQUEST.value},
        headers=exc.headers,
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle store errors that escaped the service layer."""
    logger.error(
        f"Store error on {request.url.path}: {getattr(exc, 'orig', None) or exc}",
        extra=_request_extra(request, error_code=ErrorKind.STORE_FAILURE.value),
    )
    return _error_response(ErrorKind.STORE_FAILURE)


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    This handler runs outside the middleware stack, so the CORS headers
    are attached here.
    """
    logger.error(
        f"Unexpected error on {request.url.path}",
        exc_info=exc,
        extra=_request_extra(request, error_code=ErrorKind.INTERNAL.value),
    )
    return _error_response(ErrorKind.INTERNAL, headers=CORS_HEADERS)
