"""
Form validation that reports failures as data.

validate_form never raises for bad input: malformed, missing or out-of-range
fields come back as a field-name to messages mapping the form can render.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class ValidationResult(Generic[SchemaT]):
    data: SchemaT | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None


def flatten_errors(exc: ValidationError, messages: Mapping[str, str]) -> dict[str, list[str]]:
    """
    Group pydantic errors by top-level field.

    A field with an entry in messages reports that message once, whatever
    pydantic found wrong with it. Other fields keep pydantic's own text.
    """
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__root__"
        message = messages.get(name, error["msg"])
        bucket = field_errors.setdefault(name, [])
        if message not in bucket:
            bucket.append(message)
    return field_errors


def validate_form(schema: type[SchemaT], raw: Mapping[str, Any]) -> ValidationResult[SchemaT]:
    """Validate raw form values against schema."""
    try:
        return ValidationResult(data=schema.model_validate(dict(raw)))
    except ValidationError as e:
        messages = getattr(schema, "error_messages", {})
        return ValidationResult(field_errors=flatten_errors(e, messages))
