"""Receipt Domain Entity

Immutable record of one payment event against an invoice. The receipts of
an invoice form its ledger, the authoritative source for the amount paid.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Iterable, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text, Date
from src.domain.base import BaseModel, generate_uuid
from src.domain.invoice import Currency


class Receipt(BaseModel, table=True):
    """
    Receipt - Payment recorded against an invoice

    Domain Rules:
    - Receipts are immutable; the only mutation path is deletion
    - amount is always > 0
    - currency is copied from the invoice at creation
    - receipt_number is unique (RCPT-000001)
    """

    __tablename__ = "receipts"
    __table_args__ = (
        Index('ix_receipts_invoice_id', 'invoice_id'),
        Index('ix_receipts_payment_date', 'payment_date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique receipt identifier (uuid)"
    )

    receipt_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique receipt number (e.g., RCPT-000001)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount paid (precision: 18,2)"
    )

    currency: Currency = Field(
        description="Currency copied from the invoice"
    )

    payment_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Day the payment was made"
    )

    payment_method: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Payment method (e.g., bank_transfer, mobile_money)"
    )

    reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="External payment reference"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Receipt creation timestamp (immutable)"
    )


def sum_receipt_amounts(receipts: Iterable[Receipt]) -> Decimal:
    """Ledger sum over an already fetched list of receipts"""
    return sum((Decimal(receipt.amount) for receipt in receipts), Decimal("0"))
