"""Invoice Domain Entity

Tracks client invoices and the cached aggregate of payments recorded
against them.
"""

from datetime import datetime, date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Numeric, String, Text, Date
from src.domain.base import BaseModel, generate_uuid


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Currency(str, Enum):
    """Supported invoice currencies"""
    UGX = "UGX"
    USD = "USD"


class Invoice(BaseModel, table=True):
    """
    Invoice - Bill issued to a client for a fixed total

    Domain Rules:
    - invoice_number is unique and allocated from the invoice number sequence
    - total is authoritative; paid_amount is a cache of the receipt ledger sum
    - paid_amount and status are rewritten inside every payment-affecting transaction
    - draft, overdue and cancelled are set externally, the rest are derived
    - Every read and write is scoped by the owning user_id
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_invoice_number', 'invoice_number', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (uuid)"
    )

    user_id: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Owning user"
    )

    invoice_number: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Human readable invoice number (e.g., 1001)"
    )

    invoice_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Invoice title"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        description="Invoice status (draft, pending, partially_paid, paid, overdue, cancelled)"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Invoiced amount (precision: 18,2)"
    )

    paid_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Cached sum of receipt amounts"
    )

    currency: Currency = Field(
        default=Currency.UGX,
        description="Currency code (UGX or USD)"
    )

    allow_overpayment: bool = Field(
        default=False,
        description="Accept receipts that push payments above total"
    )

    from_name: str = Field(sa_column=Column(String(255), nullable=False))
    from_email: str = Field(sa_column=Column(String(255), nullable=False))
    from_address: str = Field(sa_column=Column(String(500), nullable=False))

    client_name: str = Field(sa_column=Column(String(255), nullable=False))
    client_email: str = Field(sa_column=Column(String(255), nullable=False))
    client_address: str = Field(sa_column=Column(String(500), nullable=False))

    invoice_item_description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description"
    )

    invoice_item_quantity: int = Field(
        default=1,
        description="Line item quantity"
    )

    invoice_item_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Line item unit rate"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Invoice date"
    )

    due_date: int = Field(
        default=0,
        description="Net days after issue_date when payment is due"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free form note"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    def due_on(self) -> date:
        """Calendar day payment is due"""
        return self.issue_date + timedelta(days=self.due_date or 0)

    def is_past_due(self, today: date) -> bool:
        return self.due_on() < today
