"""CancelInvoice Use Case"""

from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO
from .errors import invoice_not_found, persistence_error
from .mappers import to_invoice_dto


class CancelInvoice:
    """
    Use Case: Cancel an invoice

    Receipts already recorded are kept. A cancelled invoice accepts no new
    receipts and is never moved out of cancelled by a ledger repair.
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: str, user_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id, for_update=True)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            if invoice.status == InvoiceStatus.CANCELLED:
                return Return.ok(to_invoice_dto(invoice))

            invoice.status = InvoiceStatus.CANCELLED
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            return Return.ok(to_invoice_dto(updated_invoice))

        except SQLAlchemyError as e:
            await self.uow.rollback()
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CANCEL_INVOICE_FAILED",
                    message="Failed to cancel invoice",
                    reason=str(e),
                )
            )
