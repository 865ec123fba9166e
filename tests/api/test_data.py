"""Tests for the invoice read routes and global error handlers."""

from datetime import date

import psycopg2

from core.models import Invoice


def _invoice(**overrides):
    fields = dict(id="inv-1", customer_id="c", amount=5000, status="pending", date=date(2024, 3, 15))
    fields.update(overrides)
    return Invoice(**fields)


class TestListInvoices:

    def test_returns_serialized_invoices(self, client, invoice_service):
        invoice_service.list_invoices.return_value = [_invoice()]

        response = client.get("/api/invoices")

        assert response.status_code == 200
        assert response.json()["data"] == [
            {"id": "inv-1", "customer_id": "c", "amount": 5000, "status": "pending", "date": "2024-03-15"},
        ]

    def test_store_error_returns_503(self, client, invoice_service):
        invoice_service.list_invoices.side_effect = psycopg2.OperationalError("down")

        response = client.get("/api/invoices")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


class TestGetInvoice:

    def test_found(self, client, invoice_service):
        invoice_service.get_invoice.return_value = _invoice(status="paid")

        response = client.get("/api/invoices/inv-1")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "paid"

    def test_not_found_returns_404(self, client, invoice_service):
        invoice_service.get_invoice.return_value = None

        response = client.get("/api/invoices/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_unexpected_error_returns_500(self, client, invoice_service):
        invoice_service.get_invoice.side_effect = KeyError("boom")

        response = client.get("/api/invoices/inv-1")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
