"""Input rules enforced by the invoicing use cases"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from libs.result import Error
from .dtos import InvoiceFieldsDTO
from .errors import validation_error

CENT = Decimal("0.01")

_REQUIRED_TEXT_FIELDS = (
    "invoice_name",
    "from_name",
    "from_email",
    "from_address",
    "client_name",
    "client_email",
    "client_address",
    "invoice_item_description",
)


def has_cent_precision(amount: Decimal) -> bool:
    """True when amount has no digits below the cent"""
    return amount == amount.quantize(CENT)


def parse_amount(value: Union[Decimal, str, int, float, None]) -> Optional[Decimal]:
    """
    Parse a payment amount

    Amounts are stored in cents; sub-cent values are rejected, not rounded.

    Returns:
        Decimal if value is a finite number > 0 with at most two decimal
        places, None otherwise
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite() or not has_cent_precision(amount):
            return None
        amount = amount.quantize(CENT)
    except (InvalidOperation, ValueError):
        return None

    if amount <= 0:
        return None
    return amount


def validate_invoice_fields(fields: InvoiceFieldsDTO) -> Optional[Error]:
    """Return the first rule an invoice field set breaks, if any"""
    for name in _REQUIRED_TEXT_FIELDS:
        if not (getattr(fields, name) or "").strip():
            return validation_error(f"{name} is required", field=name)

    for name in ("from_email", "client_email"):
        if "@" not in getattr(fields, name):
            return validation_error(f"{name} is not a valid email address", field=name)

    total = Decimal(fields.total)
    if not total.is_finite() or total <= 0:
        return validation_error("total must be greater than 0", field="total")
    if not has_cent_precision(total):
        return validation_error("total cannot have more than two decimal places", field="total")

    if fields.invoice_item_quantity < 1:
        return validation_error(
            "invoice_item_quantity must be at least 1", field="invoice_item_quantity"
        )

    rate = Decimal(fields.invoice_item_rate)
    if rate < 0:
        return validation_error("invoice_item_rate cannot be negative", field="invoice_item_rate")
    if not has_cent_precision(rate):
        return validation_error(
            "invoice_item_rate cannot have more than two decimal places", field="invoice_item_rate"
        )

    if fields.due_date < 0:
        return validation_error("due_date cannot be negative", field="due_date")

    return None
