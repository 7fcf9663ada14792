"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Dict, Union
from pydantic import BaseModel, Field
from src.domain.invoice import InvoiceStatus, Currency


class InvoiceFieldsDTO(BaseModel):
    """
    Editable invoice fields shared by create and edit commands

    Amounts are range checked by the use cases, not here, so callers other
    than the HTTP layer get a VALIDATION_ERROR result instead of an exception.
    """

    invoice_name: str = Field(..., description="Invoice title")
    total: Decimal = Field(..., description="Invoiced amount (must be > 0)")
    currency: Currency = Field(default=Currency.UGX, description="UGX or USD")
    allow_overpayment: bool = Field(
        default=False,
        description="Accept receipts that push payments above total"
    )

    from_name: str
    from_email: str
    from_address: str

    client_name: str
    client_email: str
    client_address: str

    invoice_item_description: str
    invoice_item_quantity: int = Field(default=1, description="Line item quantity (>= 1)")
    invoice_item_rate: Decimal = Field(..., description="Line item unit rate (>= 0)")

    issue_date: date = Field(..., description="Invoice date")
    due_date: int = Field(default=0, description="Net days after issue_date (>= 0)")
    note: Optional[str] = None


class CreateInvoiceCommandDTO(InvoiceFieldsDTO):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case. The invoice number is always
    allocated from the sequence.
    """

    user_id: str = Field(..., description="Owning user")
    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        description="Initial status (draft or pending)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "user_123",
                "invoice_name": "Website redesign",
                "total": "1000.00",
                "currency": "USD",
                "from_name": "Acme Studio",
                "from_email": "billing@acme.test",
                "from_address": "Plot 1, Kampala Road",
                "client_name": "Jane Client",
                "client_email": "jane@client.test",
                "client_address": "Plot 9, Jinja Road",
                "invoice_item_description": "Design work",
                "invoice_item_quantity": 1,
                "invoice_item_rate": "1000.00",
                "issue_date": "2026-10-19",
                "due_date": 30,
            }
        }


class EditInvoiceCommandDTO(InvoiceFieldsDTO):
    """
    Command DTO for editing an invoice

    Replaces the full field set. invoice_number, paid_amount and status are
    not editable: the latter two are recomputed from the receipt ledger.
    """

    invoice_id: str
    user_id: str


class CreateReceiptCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    amount is accepted raw (string or number) and parsed by CreateReceipt.
    """

    invoice_id: str
    user_id: str
    amount: Union[Decimal, str] = Field(..., description="Amount paid (finite, > 0)")
    payment_method: str = Field(..., description="Payment method (non-blank)")
    payment_date: Optional[date] = Field(
        default=None,
        description="Day the payment was made (defaults to today)"
    )
    reference: Optional[str] = None
    note: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "5f8a...",
                "user_id": "user_123",
                "amount": "400.00",
                "payment_method": "bank_transfer",
                "payment_date": "2026-10-19",
                "reference": "TX-991",
            }
        }


class InvoiceResponseDTO(BaseModel):
    """Invoice with amounts formatted for display"""

    id: str
    user_id: str
    invoice_number: int
    invoice_name: str
    status: str
    total: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    currency: str
    allow_overpayment: bool

    from_name: str
    from_email: str
    from_address: str
    client_name: str
    client_email: str
    client_address: str

    invoice_item_description: str
    invoice_item_quantity: int
    invoice_item_rate: Decimal

    issue_date: date
    due_date: int
    due_on: date
    note: Optional[str] = None

    formatted_total: str
    formatted_paid_amount: str
    formatted_remaining_amount: str

    created_at: datetime
    updated_at: datetime


class ReceiptResponseDTO(BaseModel):
    """Receipt, optionally with the invoice it belongs to"""

    id: str
    receipt_number: str
    invoice_id: str
    amount: Decimal
    formatted_amount: str
    currency: str
    payment_date: date
    payment_method: str
    reference: Optional[str] = None
    note: Optional[str] = None
    created_at: datetime

    invoice_number: Optional[int] = None
    invoice_name: Optional[str] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None


class InvoiceDetailDTO(BaseModel):
    """Invoice with its receipt ledger"""

    invoice: InvoiceResponseDTO
    receipts: List[ReceiptResponseDTO]


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    total: int = Field(..., description="Number of invoices in this page")
    limit: int
    offset: int


class ListReceiptsResponseDTO(BaseModel):
    receipts: List[ReceiptResponseDTO]
    total: int
    total_amount: Decimal = Field(..., description="Sum of listed receipt amounts")


class RemainingBalanceDTO(BaseModel):
    """Outstanding amount of one invoice, computed from the ledger"""

    invoice_id: str
    currency: str
    total: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    formatted_remaining_amount: str
    status: str


class CreateReceiptResponseDTO(BaseModel):
    invoice: InvoiceResponseDTO
    receipt: ReceiptResponseDTO
    remaining_amount: Decimal


class DeleteReceiptResponseDTO(BaseModel):
    receipt_id: str
    invoice: InvoiceResponseDTO


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: str
    receipts_deleted: int


class MarkPaidResponseDTO(BaseModel):
    """
    Outcome of MarkInvoicePaid

    When requires_receipt is True nothing was written: the caller should
    record a receipt for remaining_amount.
    """

    invoice: InvoiceResponseDTO
    requires_receipt: bool
    remaining_amount: Decimal


class SyncResultDTO(BaseModel):
    """Before/after snapshot of a ledger repair"""

    invoice_id: str
    changed: bool
    previous_paid_amount: Decimal
    paid_amount: Decimal
    previous_status: str
    status: str


class ReconciliationResultDTO(BaseModel):
    """Result of repairing every invoice from its ledger"""

    total_invoices_checked: int
    invoices_repaired: int
    repairs: List[SyncResultDTO]
    failed_invoice_ids: List[str] = Field(default_factory=list)
    reconciliation_time: datetime
    execution_time_ms: int


class OverdueSweepResultDTO(BaseModel):
    processed: int = Field(..., description="Invoices moved to overdue")
    invoice_ids: List[str]
    sweep_date: date


class CurrencySummaryDTO(BaseModel):
    """Dashboard figures for one currency"""

    currency: str
    invoice_count: int
    receipt_count: int
    total_invoiced: Decimal
    total_received: Decimal
    total_outstanding: Decimal
    overdue_count: int
    formatted_total_invoiced: str
    formatted_total_received: str
    formatted_total_outstanding: str


class DashboardSummaryDTO(BaseModel):
    user_id: str
    total_invoices: int
    total_receipts: int
    status_counts: Dict[str, int]
    currencies: List[CurrencySummaryDTO]
    recent_invoices: List[InvoiceResponseDTO]
    recent_receipts: List[ReceiptResponseDTO]


class ClientDTO(BaseModel):
    client_name: str
    client_email: str
    client_address: str


class SearchClientsResponseDTO(BaseModel):
    clients: List[ClientDTO]


class NextInvoiceNumberDTO(BaseModel):
    next_invoice_number: int


class ReminderResultDTO(BaseModel):
    invoice_id: str
    recipient_email: str
    sent: bool


class PdfDocumentDTO(BaseModel):
    filename: str
    content: bytes
    media_type: str = "application/pdf"
