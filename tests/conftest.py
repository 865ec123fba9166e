"""Shared test fixtures for the invoice dashboard test suite."""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import clear_cache
from core.config import DashboardConfig
from core.view_cache import ViewCache
from utils.request_context import clear_current_request_id


# =============================================================================
# CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_request_context():
    """Ensure clean request context before and after each test."""
    clear_current_request_id()
    yield
    clear_current_request_id()


@pytest.fixture(autouse=True)
def reset_resolved_urls():
    """Each test resolves connection URLs afresh."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def config() -> DashboardConfig:
    return DashboardConfig()


# =============================================================================
# MOCK COLLABORATORS — no infrastructure needed
# =============================================================================


@pytest.fixture
def mock_postgres():
    mock = Mock(spec=PostgresClient)
    mock.execute_returning.return_value = [{"id": "inv-1"}]
    return mock


@pytest.fixture
def mock_view_cache():
    mock = Mock(spec=ViewCache)
    mock.get.return_value = None
    mock.revalidate_path.return_value = True
    return mock


# =============================================================================
# REAL INFRASTRUCTURE — skipped unless POSTGRES_URL / VALKEY_URL are set
# =============================================================================


@pytest.fixture(scope="session")
def db():
    """Session-scoped PostgresClient with the invoices table in place."""
    url = os.getenv("POSTGRES_URL")
    if not url:
        pytest.skip("POSTGRES_URL not set")

    from core.schema import ensure_schema

    client = PostgresClient(url)
    ensure_schema(client)
    yield client
    client.close()


@pytest.fixture
def clean_db(db):
    """Empty invoices table before each integration test."""
    db.execute("TRUNCATE invoices")
    yield db


@pytest.fixture(scope="session")
def valkey():
    """Session-scoped ValkeyClient."""
    url = os.getenv("VALKEY_URL")
    if not url:
        pytest.skip("VALKEY_URL not set")

    client = ValkeyClient(url)
    yield client
    client.close()
