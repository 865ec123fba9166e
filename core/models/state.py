"""Outcomes handed back to the page that submitted an invoice form."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from core.errors import StoreErrorKind


class FormState(BaseModel):
    """
    What the form should show after a failed submission.

    errors maps form field names to messages; message is a one-line summary.
    error_kind records why a store write failed. It is kept for logging and
    never serialized back to the page.
    """

    errors: dict[str, list[str]] | None = None
    message: str | None = None
    error_kind: StoreErrorKind | None = Field(default=None, exclude=True)


@dataclass(frozen=True)
class Redirect:
    """Successful submission: the caller should navigate to path."""

    path: str
