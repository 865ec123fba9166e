"""Global exception handlers for FastAPI."""

import logging

import psycopg2
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from core.errors import classify_store_error

logger = logging.getLogger(__name__)


def _json(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the app.

    Form submissions never reach these: the invoice service reports its own
    failures. They cover the read endpoints and malformed requests.
    """

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _json(404, ErrorCodes.NOT_FOUND, message)
        return _json(400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _json(422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(psycopg2.Error)
    async def store_error_handler(request: Request, exc: psycopg2.Error):
        logger.warning(
            "Store read failed on %s: kind=%s cause=%r",
            request.url.path,
            classify_store_error(exc).value,
            exc,
        )
        return _json(503, ErrorCodes.SERVICE_UNAVAILABLE, "Database unavailable")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _json(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
