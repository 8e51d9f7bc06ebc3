"""Invoice Form Schema — validation of untrusted invoice form input.

Invariants:
    - Validation is total: returns a fully parsed InvoiceForm OR a map with every failing field
    - Error keys are the form field names (customerId, amount, status), never model attribute names
    - Each failing field gets exactly one message from FIELD_MESSAGES (stable catalog)
    - Multi-valued fields: the first string value wins, file uploads are ignored

Design Decisions:
    - Pydantic collects all field errors in one pass; we only translate them to the catalog
    - amount parsed as Decimal: "125.50" must not pass through a float
    - Sub-cent amounts that round to 0 are rejected here, not by the CHECK constraint
    - Upper bound MAX_AMOUNT keeps the stored cents inside the INTEGER column
    - Whitespace stripped before checks: "   " is not a customer id
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.core.domain_types import InvoiceStatus
from app.core.money import MAX_MINOR_UNITS, from_minor_units, to_minor_units

MAX_AMOUNT: Decimal = from_minor_units(MAX_MINOR_UNITS)

FIELD_MESSAGES: dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class InvoiceForm(BaseModel):
    """Parsed create/update invoice form. Amount in major units."""
    model_config = ConfigDict(
        str_strip_whitespace=True, populate_by_name=True, extra="ignore",
    )

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def _fits_in_cents(cls, v: Decimal) -> Decimal:
        try:
            cents = to_minor_units(v)
        except InvalidOperation as e:
            raise ValueError("amount is not representable in cents") from e
        if cents < 1:
            raise ValueError("amount rounds to zero cents")
        return v


def first_values(items: Iterable[tuple[str, Any]]) -> dict[str, str]:
    """Collapse multi-valued form items to the first string value per key."""
    values: dict[str, str] = {}
    for key, value in items:
        if isinstance(value, str) and key not in values:
            values[key] = value
    return values


def validate_invoice_form(
    data: Mapping[str, str],
) -> InvoiceForm | dict[str, list[str]]:
    """Parse form data. Returns the model, or per-field error messages."""
    try:
        return InvoiceForm.model_validate(dict(data))
    except ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            if field in FIELD_MESSAGES:
                errors[field] = [FIELD_MESSAGES[field]]
        return errors
