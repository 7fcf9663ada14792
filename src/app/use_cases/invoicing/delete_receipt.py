"""DeleteReceipt Use Case

Removes a payment from an invoice's ledger and recalculates the invoice.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.payment_status import derive_status
from .dtos import DeleteReceiptResponseDTO
from .errors import receipt_not_found, persistence_error
from .mappers import to_invoice_dto

logger = logging.getLogger(__name__)


class DeleteReceipt:
    """
    Use Case: Delete a receipt

    Business Rules:
    1. The receipt's invoice must belong to the user; otherwise the receipt
       is reported as not found
    2. paid_amount is re-summed from the remaining receipts, not decremented
    3. status = derive_status(total, new sum)
    4. Receipt delete and invoice update happen in one transaction

    Flow:
    1. Get receipt
    2. Get parent invoice for the owner with lock (SELECT FOR UPDATE)
    3. Delete receipt
    4. Re-sum ledger, derive status, update invoice
    5. Commit transaction
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

    async def execute(self, receipt_id: str, user_id: str) -> Result[DeleteReceiptResponseDTO]:
        try:
            # Step 1: Get receipt
            receipt = await self.receipt_repo.get_by_id(receipt_id)
            if not receipt:
                return Return.err(receipt_not_found(receipt_id))

            # Step 2: Ownership via the parent invoice, locked
            invoice = await self.invoice_repo.get_for_owner(
                receipt.invoice_id, user_id, for_update=True
            )
            if not invoice:
                return Return.err(receipt_not_found(receipt_id))

            # Step 3: Delete receipt
            await self.receipt_repo.delete(receipt)

            # Step 4: Recalculate from what is left in the ledger
            paid_amount = await self.receipt_repo.sum_by_invoice_id(invoice.id)
            invoice.paid_amount = paid_amount
            invoice.status = derive_status(invoice.total, paid_amount)
            updated_invoice = await self.invoice_repo.update(invoice)

            # Step 5: Commit transaction
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete receipt {receipt_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_RECEIPT_FAILED",
                    message="Failed to delete receipt",
                    reason=str(e),
                )
            )

        logger.info(
            f"Receipt {receipt_id} deleted; invoice {updated_invoice.id} now "
            f"paid_amount={updated_invoice.paid_amount}, status={updated_invoice.status.value}"
        )

        return Return.ok(
            DeleteReceiptResponseDTO(receipt_id=receipt_id, invoice=to_invoice_dto(updated_invoice))
        )
