"""Entity to DTO conversion shared by the invoicing use cases"""

from decimal import Decimal
from typing import Optional
from src.domain.invoice import Invoice
from src.domain.money import format_currency
from src.domain.payment_status import remaining_balance
from src.domain.receipt import Receipt
from .dtos import InvoiceResponseDTO, ReceiptResponseDTO


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def to_invoice_dto(invoice: Invoice, paid_amount: Optional[Decimal] = None) -> InvoiceResponseDTO:
    """
    Convert Invoice entity to response DTO

    Args:
        invoice: Invoice entity
        paid_amount: Ledger sum to report instead of the cached paid_amount
    """
    total = Decimal(invoice.total)
    paid = Decimal(invoice.paid_amount if paid_amount is None else paid_amount)
    remaining = remaining_balance(total, paid)

    return InvoiceResponseDTO(
        id=invoice.id,
        user_id=invoice.user_id,
        invoice_number=invoice.invoice_number,
        invoice_name=invoice.invoice_name,
        status=_value(invoice.status),
        total=total,
        paid_amount=paid,
        remaining_amount=remaining,
        currency=_value(invoice.currency),
        allow_overpayment=invoice.allow_overpayment,
        from_name=invoice.from_name,
        from_email=invoice.from_email,
        from_address=invoice.from_address,
        client_name=invoice.client_name,
        client_email=invoice.client_email,
        client_address=invoice.client_address,
        invoice_item_description=invoice.invoice_item_description,
        invoice_item_quantity=invoice.invoice_item_quantity,
        invoice_item_rate=invoice.invoice_item_rate,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        due_on=invoice.due_on(),
        note=invoice.note,
        formatted_total=format_currency(total, invoice.currency),
        formatted_paid_amount=format_currency(paid, invoice.currency),
        formatted_remaining_amount=format_currency(remaining, invoice.currency),
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_receipt_dto(receipt: Receipt, invoice: Optional[Invoice] = None) -> ReceiptResponseDTO:
    dto = ReceiptResponseDTO(
        id=receipt.id,
        receipt_number=receipt.receipt_number,
        invoice_id=receipt.invoice_id,
        amount=receipt.amount,
        formatted_amount=format_currency(receipt.amount, receipt.currency),
        currency=_value(receipt.currency),
        payment_date=receipt.payment_date,
        payment_method=receipt.payment_method,
        reference=receipt.reference,
        note=receipt.note,
        created_at=receipt.created_at,
    )

    if invoice is not None:
        dto.invoice_number = invoice.invoice_number
        dto.invoice_name = invoice.invoice_name
        dto.client_name = invoice.client_name
        dto.client_email = invoice.client_email

    return dto
