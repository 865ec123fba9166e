"""Propagate the current request ID through the call stack using contextvars."""

from contextlib import contextmanager
from contextvars import ContextVar

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def get_current_request_id() -> str | None:
    """
    Request ID of the request being served, if any.

    Outside a request (tests, scripts) this is None rather than an error:
    the ID is only used to correlate log lines.
    """
    return _current_request_id.get()


def set_current_request_id(request_id: str) -> None:
    """Called by RequestIDMiddleware when a request arrives."""
    _current_request_id.set(request_id)


def clear_current_request_id() -> None:
    """
    Clear request context.

    Must be called in a finally block to prevent leaking into the next request.
    """
    _current_request_id.set(None)


@contextmanager
def request_context(request_id: str):
    """
    Temporarily bind a request ID.

    Example:
        with request_context("req-123"):
            service.delete_invoice(invoice_id)  # log lines carry req-123
    """
    previous = _current_request_id.get()
    set_current_request_id(request_id)
    try:
        yield
    finally:
        _current_request_id.set(previous)
