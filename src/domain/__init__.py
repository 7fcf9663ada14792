from .base import BaseModel, generate_uuid
from .invoice import Invoice, InvoiceStatus, Currency
from .receipt import Receipt, sum_receipt_amounts
from .number_sequence import (
    NumberSequence,
    INVOICE_NUMBER_SEQUENCE,
    RECEIPT_NUMBER_SEQUENCE,
    format_receipt_number,
)
from .payment_status import derive_status, reconcile_status, remaining_balance
from .money import format_currency

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Invoice",
    "InvoiceStatus",
    "Currency",
    "Receipt",
    "sum_receipt_amounts",
    "NumberSequence",
    "INVOICE_NUMBER_SEQUENCE",
    "RECEIPT_NUMBER_SEQUENCE",
    "format_receipt_number",
    "derive_status",
    "reconcile_status",
    "remaining_balance",
    "format_currency",
]
