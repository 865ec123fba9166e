"""Invoice domain models.

Users enter amounts in dollars; the store keeps cents (integer) to avoid
floating point issues. $99.99 = 9999 cents.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

# Largest dollar amount whose cents fit the INTEGER amount column
MAX_AMOUNT = Decimal("21474836.47")


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    PENDING = "pending"
    PAID = "paid"


class InvoiceForm(BaseModel):
    """
    Fields a user submits from the invoice form.

    Populated from the form's own field names (customerId, amount, status).
    Anything else in the submission, including id and date, is ignored:
    both are assigned by the system.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Message shown for any failure on a field, keyed by form field name
    error_messages: ClassVar[dict[str, str]] = {
        "customerId": "Please select a customer.",
        "amount": "Please enter an Amount greater than 0.",
        "status": "Please select an invoice status.",
    }

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Decimal = Field(
        ..., ge=Decimal("0.01"), le=MAX_AMOUNT, description="Amount in dollars, at least one cent"
    )
    status: InvoiceStatus

    @property
    def amount_in_cents(self) -> int:
        """Amount converted to cents, rounded half-up."""
        return int((self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CreateInvoice(InvoiceForm):
    """Form schema for creating an invoice."""


class UpdateInvoice(InvoiceForm):
    """Form schema for editing an invoice. Same fields as creation."""


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: str
    customer_id: str
    amount: int = Field(..., description="Amount in cents")
    status: InvoiceStatus
    date: date

    model_config = {"from_attributes": True}

    @property
    def amount_dollars(self) -> float:
        """Amount in dollars for display."""
        return self.amount / 100

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
