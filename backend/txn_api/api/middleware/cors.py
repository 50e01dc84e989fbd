"""Fixed cross-origin header policy.

Starlette's CORSMiddleware only decorates requests that carry an Origin
header and answers preflights with 200. This API promises the same three
headers on every response and a bare 204 for any OPTIONS request.
"""
from typing import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class FixedCORSMiddleware(BaseHTTPMiddleware):
    """Apply CORS_HEADERS everywhere and short-circuit preflight requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
