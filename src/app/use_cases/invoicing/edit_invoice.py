"""EditInvoice Use Case

Replaces an invoice's fields and re-derives its payment state from the
receipt ledger.
"""

import logging
from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.payment_status import derive_status
from .dtos import EditInvoiceCommandDTO, InvoiceResponseDTO
from .errors import invoice_not_found, persistence_error
from .mappers import to_invoice_dto
from .validation import validate_invoice_fields

logger = logging.getLogger(__name__)


class EditInvoice:
    """
    Use Case: Edit an invoice

    Business Rules:
    1. Only the owner can edit; other users get INVOICE_NOT_FOUND
    2. paid_amount is recomputed from the ledger, never taken from the caller
    3. status = derive_status(new total, ledger sum), so lowering the total
       below what was already paid settles the invoice
    4. invoice_number is immutable
    5. Client notification happens after commit and is best-effort

    Flow:
    1. Validate fields
    2. Get invoice with lock (SELECT FOR UPDATE)
    3. Sum the receipt ledger
    4. Apply fields, paid_amount and derived status as one update
    5. Commit transaction
    6. Send invoice_updated notification
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        receipt_repo: ReceiptRepository,
        notifier: Optional[InvoiceNotifier] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo
        self.notifier = notifier

    async def execute(self, command: EditInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        # Step 1: Validate
        error = validate_invoice_fields(command)
        if error:
            return Return.err(error)

        try:
            # Step 2: Get invoice with pessimistic lock
            invoice = await self.invoice_repo.get_for_owner(
                command.invoice_id, command.user_id, for_update=True
            )
            if not invoice:
                return Return.err(invoice_not_found(command.invoice_id))

            # Step 3: Ledger sum is the authoritative paid amount
            paid_amount = await self.receipt_repo.sum_by_invoice_id(invoice.id)

            # Step 4: Apply changes
            total = Decimal(command.total)
            invoice.invoice_name = command.invoice_name.strip()
            invoice.total = total
            invoice.currency = command.currency
            invoice.allow_overpayment = command.allow_overpayment
            invoice.from_name = command.from_name
            invoice.from_email = command.from_email
            invoice.from_address = command.from_address
            invoice.client_name = command.client_name
            invoice.client_email = command.client_email
            invoice.client_address = command.client_address
            invoice.invoice_item_description = command.invoice_item_description
            invoice.invoice_item_quantity = command.invoice_item_quantity
            invoice.invoice_item_rate = Decimal(command.invoice_item_rate)
            invoice.issue_date = command.issue_date
            invoice.due_date = command.due_date
            invoice.note = command.note
            invoice.paid_amount = paid_amount
            invoice.status = derive_status(total, paid_amount)

            updated_invoice = await self.invoice_repo.update(invoice)

            # Step 5: Commit transaction
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to persist edit of invoice {command.invoice_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="EDIT_INVOICE_FAILED",
                    message="Failed to edit invoice",
                    reason=str(e),
                )
            )

        # Step 6: Notify client (best-effort)
        if self.notifier:
            await self.notifier.invoice_updated(updated_invoice)

        return Return.ok(to_invoice_dto(updated_invoice))
