"""Invoice Notifier

Builds client notifications for invoice and payment events and sends them
on a best-effort basis. Called only after the financial change committed.
"""

import logging
from datetime import date
from typing import Any, Dict
from src.app.services.notification_service import NotificationService, NotificationTemplate
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import format_currency
from src.domain.receipt import Receipt
from src.domain.payment_status import remaining_balance

logger = logging.getLogger(__name__)


def format_long_date(value: date) -> str:
    """19 October 2026"""
    return f"{value.day} {value.strftime('%B %Y')}"


class InvoiceNotifier:
    """
    Best-effort notifications about invoices

    Every method returns False instead of raising when delivery fails.
    """

    def __init__(self, notification_service: NotificationService, base_url: str):
        self.notification_service = notification_service
        self.base_url = base_url.rstrip("/")

    def invoice_link(self, invoice: Invoice) -> str:
        return f"{self.base_url}/api/invoices/{invoice.id}/pdf"

    def receipt_link(self, receipt: Receipt) -> str:
        return f"{self.base_url}/api/receipts/{receipt.id}/pdf"

    def _invoice_variables(self, invoice: Invoice) -> Dict[str, Any]:
        return {
            "clientName": invoice.client_name,
            "invoiceNumber": invoice.invoice_number,
            "invoiceDueDate": format_long_date(invoice.due_on()),
            "totalAmount": format_currency(invoice.total, invoice.currency),
            "invoiceLink": self.invoice_link(invoice),
        }

    async def invoice_created(self, invoice: Invoice) -> bool:
        return await self._send(
            invoice, NotificationTemplate.INVOICE_CREATED, self._invoice_variables(invoice)
        )

    async def invoice_updated(self, invoice: Invoice) -> bool:
        return await self._send(
            invoice, NotificationTemplate.INVOICE_UPDATED, self._invoice_variables(invoice)
        )

    async def invoice_reminder(self, invoice: Invoice) -> bool:
        return await self._send(
            invoice, NotificationTemplate.INVOICE_REMINDER, self._invoice_variables(invoice)
        )

    async def payment_received(self, invoice: Invoice, receipt: Receipt) -> bool:
        variables = {
            "clientName": invoice.client_name,
            "invoiceNumber": invoice.invoice_number,
            "receiptNumber": receipt.receipt_number,
            "paymentDate": format_long_date(receipt.payment_date),
            "totalAmount": format_currency(receipt.amount, invoice.currency),
            "isPaid": invoice.status == InvoiceStatus.PAID,
            "isPartialPayment": invoice.status == InvoiceStatus.PARTIALLY_PAID,
            "remainingAmount": format_currency(
                remaining_balance(invoice.total, invoice.paid_amount), invoice.currency
            ),
            "receiptLink": self.receipt_link(receipt),
        }
        return await self._send(invoice, NotificationTemplate.PAYMENT_RECEIVED, variables)

    async def _send(
        self, invoice: Invoice, template: NotificationTemplate, variables: Dict[str, Any]
    ) -> bool:
        try:
            sent = await self.notification_service.send_template(
                invoice.client_email, template, variables
            )
        except Exception as e:
            logger.warning(
                f"Failed to send {template.value} notification for invoice {invoice.id}: {e}"
            )
            return False

        if not sent:
            logger.warning(
                f"{template.value} notification for invoice {invoice.id} was not delivered"
            )
        return sent
