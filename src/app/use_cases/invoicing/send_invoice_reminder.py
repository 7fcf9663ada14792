"""Send Invoice Reminder Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ReminderResultDTO
from .errors import INVOICE_CANCELLED, NOTIFICATION_FAILED, invoice_not_found

logger = logging.getLogger(__name__)


class SendInvoiceReminder:
    """
    Use Case: Email an invoice to its client

    Sending is the whole operation here, so unlike the notifications that
    follow payments a delivery failure is returned as NOTIFICATION_FAILED.
    Cancelled invoices are not sent.
    """

    def __init__(self, invoice_repo: InvoiceRepository, notifier: InvoiceNotifier):
        self.invoice_repo = invoice_repo
        self.notifier = notifier

    async def execute(self, invoice_id: str, user_id: str) -> Result[ReminderResultDTO]:
        invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
        if not invoice:
            return Return.err(invoice_not_found(invoice_id))

        if invoice.status == InvoiceStatus.CANCELLED:
            return Return.err(
                Error(
                    code=INVOICE_CANCELLED,
                    message=f"Invoice {invoice_id} is cancelled and cannot be sent",
                )
            )

        sent = await self.notifier.invoice_reminder(invoice)
        if not sent:
            return Return.err(
                Error(
                    code=NOTIFICATION_FAILED,
                    message=f"Failed to send invoice #{invoice.invoice_number} to {invoice.client_email}",
                )
            )

        logger.info(f"Reminder for invoice {invoice.id} sent to {invoice.client_email}")

        return Return.ok(
            ReminderResultDTO(invoice_id=invoice.id, recipient_email=invoice.client_email, sent=True)
        )
