"""Error codes returned by the invoicing use cases"""

from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Error

INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
RECEIPT_NOT_FOUND = "RECEIPT_NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"
INVOICE_CANCELLED = "INVOICE_CANCELLED"
OVERPAYMENT = "OVERPAYMENT"
NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


def invoice_not_found(invoice_id: str) -> Error:
    # Ownership failures are reported the same way
    return Error(
        code=INVOICE_NOT_FOUND,
        message=f"Invoice {invoice_id} not found",
    )


def receipt_not_found(receipt_id: str) -> Error:
    return Error(
        code=RECEIPT_NOT_FOUND,
        message=f"Receipt {receipt_id} not found",
    )


def validation_error(message: str, field: Optional[str] = None) -> Error:
    return Error(
        code=VALIDATION_ERROR,
        message=message,
        details={"field": field} if field else None,
    )


def overpayment_error(attempted_total: Decimal, allowed_total: Decimal) -> Error:
    return Error(
        code=OVERPAYMENT,
        message=(
            f"Payment exceeds invoice total. Attempted total: {attempted_total}, "
            f"allowed: {allowed_total}"
        ),
        details={
            "attempted_total": str(attempted_total),
            "allowed_total": str(allowed_total),
        },
    )


def persistence_error(e: SQLAlchemyError) -> Error:
    return Error(
        code=PERSISTENCE_ERROR,
        message="Database operation failed, please retry",
        reason=str(e),
    )
