"""DDL for the invoices table (PostgreSQL 13+ for built-in gen_random_uuid)."""

from clients.postgres_client import PostgresClient

# Identifiers are opaque text: generated ids are UUIDs, but nothing relies on it
INVOICES_DDL = """
CREATE TABLE IF NOT EXISTS invoices (
    id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    customer_id TEXT NOT NULL,
    amount INTEGER NOT NULL,
    status VARCHAR(255) NOT NULL,
    date DATE NOT NULL,
    CONSTRAINT invoices_status_check CHECK (status IN ('pending', 'paid'))
)
"""


def ensure_schema(postgres: PostgresClient) -> None:
    """Create the invoices table if it doesn't exist."""
    postgres.execute(INVOICES_DDL)
