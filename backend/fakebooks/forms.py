"""
Parsing and validation of submitted form fields.

Validators return an error message for display next to the field, or None
when the value is acceptable. Parsers turn raw form strings into values and
return None for input that cannot be interpreted at all.
"""

import math
import re
from datetime import date
from typing import Any

from pydantic import ValidationError

FieldErrors = dict[str, str | None]

_ISO_DATE = re.compile(r"^\s*(\d{1,4})-(\d{1,2})-(\d{1,2})\s*$")

# Column limits of the matching models
MAX_DEPOSIT_NOTE_LENGTH = 1000
MAX_LINE_ITEM_DESCRIPTION_LENGTH = 500
# Largest value a SQL INTEGER column accepts
MAX_LINE_ITEM_QUANTITY = 2**31 - 1


def has_errors(errors: FieldErrors) -> bool:
    return any(errors.values())


def parse_amount(value: str | None) -> float | None:
    """
    Parse a numeric form field.

    A blank field counts as zero so it is reported by the amount validator;
    None means the value is not a number at all.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return 0.0
    try:
        amount = float(value)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def parse_date(value: str) -> date | None:
    """Parse a ``YYYY-MM-DD`` date field; None stands for an invalid date."""
    match = _ISO_DATE.match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def validate_amount(amount: float) -> str | None:
    if amount <= 0:
        return "Must be greater than 0"
    if round(amount, 2) != amount:
        return "Must only have two decimal places"
    return None


def validate_deposit_date(value: date | None) -> str | None:
    if value is None:
        return "Please enter a valid date"
    return None


def validate_due_date(value: date | None) -> str | None:
    if value is None:
        return "Please enter a valid date"
    return None


def validate_customer_id(customer_id: str | None) -> str | None:
    if not customer_id:
        return "Please select a customer"
    return None


def validate_line_item_quantity(quantity: float | None) -> str | None:
    if quantity is None or quantity <= 0:
        return "Must be greater than 0"
    if not float(quantity).is_integer():
        return "Must be a whole number"
    if quantity > MAX_LINE_ITEM_QUANTITY:
        return f"Must be {MAX_LINE_ITEM_QUANTITY:,} or less"
    return None


def validate_line_item_unit_price(unit_price: float | None) -> str | None:
    if unit_price is None:
        return "Must be greater than 0"
    return validate_amount(unit_price)


def validate_line_item_description(description: str) -> str | None:
    description = description.strip()
    if not description:
        return "Description is required"
    if len(description) > MAX_LINE_ITEM_DESCRIPTION_LENGTH:
        return f"Must be {MAX_LINE_ITEM_DESCRIPTION_LENGTH} characters or fewer"
    return None


def validate_deposit_note(note: str) -> str | None:
    if len(note) > MAX_DEPOSIT_NOTE_LENGTH:
        return f"Must be {MAX_DEPOSIT_NOTE_LENGTH} characters or fewer"
    return None


def blank_to_none(data: dict[str, Any]) -> dict[str, Any]:
    """Treat empty optional text inputs as missing values."""
    return {
        key: (None if isinstance(value, str) and not value.strip() else value)
        for key, value in data.items()
    }


def field_errors_from_validation(exc: ValidationError) -> FieldErrors:
    """Map a pydantic validation error onto per-field messages, first error wins."""
    errors: FieldErrors = {}
    for error in exc.errors():
        if not error["loc"]:
            continue
        field = str(error["loc"][0])
        if not errors.get(field):
            errors[field] = _friendly_message(error)
    return errors


def _friendly_message(error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return "This field is required"
    if error_type in ("float_parsing", "int_parsing"):
        return "Must be a number"
    message = error.get("msg", "Invalid value")
    # "value is not a valid email address: ..." -> first clause only
    return message.split(":")[0]
