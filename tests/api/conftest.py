"""API test fixtures — TestClient over a mocked InvoiceService."""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from core.services.invoice_service import InvoiceService


@pytest.fixture
def invoice_service():
    return Mock(spec=InvoiceService)


@pytest.fixture
def services(invoice_service):
    return {"invoice": invoice_service}


@pytest.fixture
def app(services):
    """FastAPI app with error handlers and the invoice routers."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
