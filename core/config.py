"""Dashboard configuration."""

from pydantic import BaseModel, Field


class DashboardConfig(BaseModel):
    """
    Invoice dashboard configuration.

    Connection strings are not part of this model; they come from
    clients.vault_client so they are resolved once per process.
    """

    invoices_path: str = Field(
        default="/dashboard/invoices",
        description="Listing view that mutations invalidate and redirect to",
    )
    view_cache_prefix: str = Field(
        default="view",
        description="Key prefix for cached views in Valkey",
        min_length=1,
    )
    view_cache_ttl_seconds: int = Field(
        default=300,
        description="How long a cached listing stays valid",
        ge=1,
        le=86400,
    )
    listing_limit: int = Field(
        default=100,
        description="Maximum invoices shown on the listing view",
        ge=1,
        le=1000,
    )
    create_schema: bool = Field(
        default=False,
        description="Create the invoices table at startup if missing",
    )
