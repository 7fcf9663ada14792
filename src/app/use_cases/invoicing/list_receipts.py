"""Receipt read use cases"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.receipt import sum_receipt_amounts
from .dtos import ListReceiptsResponseDTO, ReceiptResponseDTO
from .errors import invoice_not_found, receipt_not_found
from .mappers import to_receipt_dto


class ListReceipts:
    """
    List Receipts Use Case

    With invoice_id: the ledger of one owned invoice, newest payment first.
    Without: every receipt of the user with its invoice number and client.
    """

    def __init__(self, invoice_repo: InvoiceRepository, receipt_repo: ReceiptRepository):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(
        self, user_id: str, invoice_id: Optional[str] = None
    ) -> Result[ListReceiptsResponseDTO]:
        if invoice_id is not None:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            receipts = await self.receipt_repo.list_by_invoice_id(invoice.id)
            return Return.ok(
                ListReceiptsResponseDTO(
                    receipts=[to_receipt_dto(receipt, invoice) for receipt in receipts],
                    total=len(receipts),
                    total_amount=sum_receipt_amounts(receipts),
                )
            )

        rows = await self.receipt_repo.list_by_user(user_id)
        return Return.ok(
            ListReceiptsResponseDTO(
                receipts=[to_receipt_dto(receipt, invoice) for receipt, invoice in rows],
                total=len(rows),
                total_amount=sum_receipt_amounts(receipt for receipt, _ in rows),
            )
        )


class GetReceipt:
    """
    Get Receipt Use Case

    Errors:
        RECEIPT_NOT_FOUND: receipt missing or its invoice owned by another user
    """

    def __init__(self, invoice_repo: InvoiceRepository, receipt_repo: ReceiptRepository):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(self, receipt_id: str, user_id: str) -> Result[ReceiptResponseDTO]:
        receipt = await self.receipt_repo.get_by_id(receipt_id)
        if not receipt:
            return Return.err(receipt_not_found(receipt_id))

        invoice = await self.invoice_repo.get_for_owner(receipt.invoice_id, user_id)
        if not invoice:
            return Return.err(receipt_not_found(receipt_id))

        return Return.ok(to_receipt_dto(receipt, invoice))
