"""Invoicing domain use cases"""
from .create_invoice import CreateInvoice
from .edit_invoice import EditInvoice
from .delete_invoice import DeleteInvoice
from .cancel_invoice import CancelInvoice
from .mark_invoice_paid import MarkInvoicePaid
from .create_receipt import CreateReceipt
from .delete_receipt import DeleteReceipt
from .sync_invoice_payments import SyncInvoicePayments
from .reconcile_invoice_payments import ReconcileInvoicePayments
from .mark_overdue_invoices import MarkOverdueInvoices
from .get_invoice import GetInvoice, GetRemainingBalance
from .list_invoices import ListInvoices
from .list_receipts import ListReceipts, GetReceipt
from .get_dashboard_summary import GetDashboardSummary
from .search_clients import SearchClients
from .get_next_invoice_number import GetNextInvoiceNumber
from .send_invoice_reminder import SendInvoiceReminder
from .generate_documents import GenerateInvoicePdf, GenerateReceiptPdf
from .dtos import (
    CreateInvoiceCommandDTO,
    EditInvoiceCommandDTO,
    CreateReceiptCommandDTO,
    InvoiceResponseDTO,
    ReceiptResponseDTO,
    InvoiceDetailDTO,
    ListInvoicesResponseDTO,
    ListReceiptsResponseDTO,
    RemainingBalanceDTO,
    CreateReceiptResponseDTO,
    DeleteReceiptResponseDTO,
    DeleteInvoiceResponseDTO,
    MarkPaidResponseDTO,
    SyncResultDTO,
    ReconciliationResultDTO,
    OverdueSweepResultDTO,
    CurrencySummaryDTO,
    DashboardSummaryDTO,
    ClientDTO,
    SearchClientsResponseDTO,
    NextInvoiceNumberDTO,
    ReminderResultDTO,
    PdfDocumentDTO,
)

__all__ = [
    "CreateInvoice",
    "EditInvoice",
    "DeleteInvoice",
    "CancelInvoice",
    "MarkInvoicePaid",
    "CreateReceipt",
    "DeleteReceipt",
    "SyncInvoicePayments",
    "ReconcileInvoicePayments",
    "MarkOverdueInvoices",
    "GetInvoice",
    "GetRemainingBalance",
    "ListInvoices",
    "ListReceipts",
    "GetReceipt",
    "GetDashboardSummary",
    "SearchClients",
    "GetNextInvoiceNumber",
    "SendInvoiceReminder",
    "GenerateInvoicePdf",
    "GenerateReceiptPdf",
    "CreateInvoiceCommandDTO",
    "EditInvoiceCommandDTO",
    "CreateReceiptCommandDTO",
    "InvoiceResponseDTO",
    "ReceiptResponseDTO",
    "InvoiceDetailDTO",
    "ListInvoicesResponseDTO",
    "ListReceiptsResponseDTO",
    "RemainingBalanceDTO",
    "CreateReceiptResponseDTO",
    "DeleteReceiptResponseDTO",
    "DeleteInvoiceResponseDTO",
    "MarkPaidResponseDTO",
    "SyncResultDTO",
    "ReconciliationResultDTO",
    "OverdueSweepResultDTO",
    "CurrencySummaryDTO",
    "DashboardSummaryDTO",
    "ClientDTO",
    "SearchClientsResponseDTO",
    "NextInvoiceNumberDTO",
    "ReminderResultDTO",
    "PdfDocumentDTO",
]
