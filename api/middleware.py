"""Request-scoped middleware for API requests."""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from utils.request_context import set_current_request_id, clear_current_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID to every request.

    An incoming X-Request-ID header is reused so IDs line up with an upstream
    proxy. The ID is bound to the request context for log correlation.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        set_current_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_current_request_id()
        response.headers["X-Request-ID"] = request_id
        return response
