"""
Application entry point.

Builds the FastAPI app. Store and cache clients are opened once in the
lifespan, injected into InvoiceService, and closed at shutdown.

Run with:
    uvicorn main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import get_database_url, get_valkey_url
from core.config import DashboardConfig
from core.schema import ensure_schema
from core.services.invoice_service import InvoiceService
from core.view_cache import ViewCache

logger = logging.getLogger(__name__)


def create_app(config: DashboardConfig | None = None, services: dict | None = None) -> FastAPI:
    """
    Build the dashboard API.

    Args:
        config: Dashboard settings (defaults apply when omitted)
        services: Prebuilt services. When given, no clients are opened;
            tests pass mocks here.
    """
    config = config or DashboardConfig()
    owns_services = services is None
    services = {} if services is None else services

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not owns_services:
            yield
            return

        postgres = PostgresClient(get_database_url())
        try:
            valkey = ValkeyClient(get_valkey_url())
        except Exception:
            postgres.close()
            raise

        try:
            if config.create_schema:
                ensure_schema(postgres)
            view_cache = ViewCache(
                valkey,
                prefix=config.view_cache_prefix,
                ttl_seconds=config.view_cache_ttl_seconds,
            )
            services["invoice"] = InvoiceService(postgres, view_cache, config)
            logger.info("Invoice dashboard started")
            yield
        finally:
            services.clear()
            valkey.close()
            postgres.close()
            logger.info("Invoice dashboard stopped")

    app = FastAPI(title="Invoice Dashboard", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")

    return app


app = create_app()
