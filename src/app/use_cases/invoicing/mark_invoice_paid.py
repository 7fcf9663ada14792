"""MarkInvoicePaid Use Case

Marks an invoice as paid only when the receipt ledger already covers it.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.invoice import InvoiceStatus
from src.domain.payment_status import remaining_balance
from .dtos import MarkPaidResponseDTO
from .errors import INVOICE_CANCELLED, invoice_not_found, persistence_error
from .mappers import to_invoice_dto

logger = logging.getLogger(__name__)


class MarkInvoicePaid:
    """
    Use Case: Mark an invoice as paid

    Business Rules:
    1. An invoice is never marked paid without receipts covering its total
    2. If the ledger covers the total, status and paid_amount are repaired
       to PAID / ledger sum
    3. Otherwise nothing is written and the caller is told to record a
       receipt for the remaining amount
    4. Cancelled invoices are rejected; they accept no receipts either

    Flow:
    1. Get invoice with lock (SELECT FOR UPDATE)
    2. Sum the receipt ledger
    3. remaining <= 0: write PAID and commit
    4. remaining > 0: return requires_receipt with the remaining amount
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        receipt_repo: ReceiptRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(self, invoice_id: str, user_id: str) -> Result[MarkPaidResponseDTO]:
        try:
            # Step 1: Get invoice with pessimistic lock
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id, for_update=True)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            if invoice.status == InvoiceStatus.CANCELLED:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=INVOICE_CANCELLED,
                        message=f"Invoice {invoice_id} is cancelled and cannot be marked as paid",
                    )
                )

            # Step 2: Sum the ledger
            ledger_sum = await self.receipt_repo.sum_by_invoice_id(invoice.id)
            remaining = remaining_balance(invoice.total, ledger_sum)

            # Step 4: Not covered, caller must record a receipt
            if remaining > 0:
                response = MarkPaidResponseDTO(
                    invoice=to_invoice_dto(invoice, paid_amount=ledger_sum),
                    requires_receipt=True,
                    remaining_amount=remaining,
                )
                # Releases the row lock; nothing was written
                await self.uow.rollback()
                return Return.ok(response)

            # Step 3: Covered, repair to PAID
            invoice.status = InvoiceStatus.PAID
            invoice.paid_amount = ledger_sum
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark invoice {invoice_id} as paid: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_INVOICE_PAID_FAILED",
                    message="Failed to mark invoice as paid",
                    reason=str(e),
                )
            )

        return Return.ok(
            MarkPaidResponseDTO(
                invoice=to_invoice_dto(updated_invoice),
                requires_receipt=False,
                remaining_amount=remaining_balance(updated_invoice.total, updated_invoice.paid_amount),
            )
        )
