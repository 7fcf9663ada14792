"""List Invoices Use Case"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ListInvoicesResponseDTO
from .errors import validation_error
from .mappers import to_invoice_dto


class ListInvoices:
    """
    List Invoices Use Case

    Returns a user's invoices, newest first, with optional status filter
    and pagination.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        if limit < 1 or limit > 100:
            return Return.err(validation_error("limit must be between 1 and 100", field="limit"))
        if offset < 0:
            return Return.err(validation_error("offset cannot be negative", field="offset"))

        invoices = await self.invoice_repo.list_by_user(
            user_id, status=status, limit=limit, offset=offset
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[to_invoice_dto(invoice) for invoice in invoices],
                total=len(invoices),
                limit=limit,
                offset=offset,
            )
        )
