"""DeleteInvoice Use Case

Deletes an invoice together with its receipts.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from .dtos import DeleteInvoiceResponseDTO
from .errors import invoice_not_found, persistence_error

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Business Rules:
    1. Only the owner can delete; other users get INVOICE_NOT_FOUND
    2. Receipts are deleted with the invoice in the same transaction, so no
       receipt ever outlives its invoice
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

    async def execute(self, invoice_id: str, user_id: str) -> Result[DeleteInvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id, for_update=True)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            receipts_deleted = await self.receipt_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)

            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )

        logger.info(f"Invoice {invoice_id} deleted with {receipts_deleted} receipts")

        return Return.ok(
            DeleteInvoiceResponseDTO(invoice_id=invoice_id, receipts_deleted=receipts_deleted)
        )
