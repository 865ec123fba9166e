"""
Invoice service: the create, update and delete handlers behind the invoice form.

Each mutation validates the submitted form, runs exactly one statement and
then invalidates the cached listing view. Nothing raises across these
methods: bad input and failed writes come back as a FormState the page can
render, and a successful create or update comes back as a Redirect.
"""

import logging
from typing import Any, Mapping

import psycopg2

from clients.postgres_client import PostgresClient
from core.config import DashboardConfig
from core.errors import StoreError
from core.models import (
    Invoice, InvoiceForm, CreateInvoice, UpdateInvoice, FormState, Redirect,
)
from core.validation import validate_form
from core.view_cache import ViewCache
from utils.request_context import get_current_request_id
from utils.timezone import today_utc

logger = logging.getLogger(__name__)

# Only these fields are read from a submission
FORM_FIELDS = ("customerId", "amount", "status")


def _extract_fields(form: Mapping[str, Any]) -> dict[str, Any]:
    return {name: form.get(name) for name in FORM_FIELDS}


class InvoiceService:
    """Service for invoice form submissions and the listing they feed."""

    def __init__(
        self,
        postgres: PostgresClient,
        view_cache: ViewCache,
        config: DashboardConfig | None = None,
    ):
        self.postgres = postgres
        self.view_cache = view_cache
        self.config = config or DashboardConfig()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_invoice(
        self, prior_state: FormState | None, form: Mapping[str, Any]
    ) -> Redirect | FormState:
        """
        Create an invoice from a form submission.

        Args:
            prior_state: State the form last rendered (unused)
            form: Raw submission with customerId, amount and status

        Returns:
            Redirect to the listing on success, otherwise the FormState to show
        """
        result = validate_form(CreateInvoice, _extract_fields(form))
        if not result.success:
            return FormState(
                errors=result.field_errors,
                message="Missing Fields. Failed to create invoice",
            )

        data = result.data
        created_on = today_utc().isoformat()

        try:
            rows = self._write(
                "create",
                """
                INSERT INTO invoices (customer_id, amount, status, date)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (data.customer_id, data.amount_in_cents, data.status.value, created_on),
            )
        except StoreError as e:
            return self._store_failure(e, "Database error: Failed to create invoice")

        logger.info("Created invoice %s for customer %s", rows[0]["id"], data.customer_id)
        self._revalidate_listing()
        return Redirect(self.config.invoices_path)

    def update_invoice(
        self, invoice_id: str, prior_state: FormState | None, form: Mapping[str, Any]
    ) -> Redirect | FormState:
        """
        Update customer, amount and status of an invoice.

        The invoice's id and date are never changed. An id that matches no
        row is not an error; it is logged and reported as success.

        Returns:
            Redirect to the listing on success, otherwise the FormState to show
        """
        result = validate_form(UpdateInvoice, _extract_fields(form))
        if not result.success:
            return FormState(
                errors=result.field_errors,
                message="Missing Fields. Failed to update invoice",
            )

        data: InvoiceForm = result.data

        try:
            rows = self._write(
                "update",
                """
                UPDATE invoices
                SET customer_id = %s, amount = %s, status = %s
                WHERE id = %s
                RETURNING id
                """,
                (data.customer_id, data.amount_in_cents, data.status.value, invoice_id),
            )
        except StoreError as e:
            return self._store_failure(e, "Database error: Failed to update invoice")

        if not rows:
            logger.warning("Update matched no invoice %s", invoice_id)

        self._revalidate_listing()
        return Redirect(self.config.invoices_path)

    def delete_invoice(self, invoice_id: str) -> FormState | None:
        """
        Hard-delete an invoice.

        Returns:
            None on success (including an id that matched nothing),
            FormState with a message if the delete failed
        """
        try:
            rows = self._write(
                "delete",
                "DELETE FROM invoices WHERE id = %s RETURNING id",
                (invoice_id,),
            )
        except StoreError as e:
            return self._store_failure(e, "Database error: Failed to delete invoice")

        if not rows:
            logger.warning("Delete matched no invoice %s", invoice_id)

        self._revalidate_listing()
        return None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        """Invoice by ID, or None if it doesn't exist."""
        row = self.postgres.execute_single(
            "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = %s",
            (invoice_id,)
        )
        if row is None:
            return None
        return Invoice.model_validate(row)

    def list_invoices(self) -> list[Invoice]:
        """
        Invoices for the listing view, newest first.

        Served from the view cache when it holds a copy; otherwise read from
        the store and cached until the next mutation or TTL expiry.
        """
        path = self.config.invoices_path
        cached = self.view_cache.get(path)
        if cached is not None:
            return [Invoice.model_validate(row) for row in cached]

        rows = self.postgres.execute(
            """
            SELECT id, customer_id, amount, status, date
            FROM invoices
            ORDER BY date DESC, id
            LIMIT %s
            """,
            (self.config.listing_limit,)
        )
        invoices = [Invoice.model_validate(row) for row in rows]
        self.view_cache.put(path, [i.model_dump(mode="json") for i in invoices])
        return invoices

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _write(self, operation: str, query: str, params: tuple) -> list[dict[str, Any]]:
        """Run one write statement, wrapping driver failures in StoreError."""
        try:
            return self.postgres.execute_returning(query, params)
        except psycopg2.Error as e:
            raise StoreError.from_exception(operation, e) from e

    def _store_failure(self, error: StoreError, message: str) -> FormState:
        logger.warning(
            "Invoice %s failed: kind=%s cause=%r request_id=%s",
            error.operation,
            error.kind.value,
            error.__cause__,
            get_current_request_id(),
        )
        return FormState(message=message, error_kind=error.kind)

    def _revalidate_listing(self) -> None:
        self.view_cache.revalidate_path(self.config.invoices_path)
