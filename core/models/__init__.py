"""Core domain models."""

from core.models.invoice import (
    Invoice, InvoiceForm, CreateInvoice, UpdateInvoice, InvoiceStatus,
)
from core.models.state import FormState, Redirect

__all__ = [
    # Invoice
    "Invoice", "InvoiceForm", "CreateInvoice", "UpdateInvoice", "InvoiceStatus",
    # Form outcomes
    "FormState", "Redirect",
]
