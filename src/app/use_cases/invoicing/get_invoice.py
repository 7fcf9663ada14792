"""Invoice read use cases

Invoice detail and remaining balance, both computed from the receipt ledger.
"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.money import format_currency
from src.domain.payment_status import remaining_balance
from src.domain.receipt import sum_receipt_amounts
from .dtos import InvoiceDetailDTO, RemainingBalanceDTO
from .errors import invoice_not_found
from .mappers import to_invoice_dto, to_receipt_dto


class GetInvoice:
    """
    Get Invoice Use Case

    Read-only. Reports paid and remaining amounts from the receipt ledger
    rather than the cached paid_amount.

    Errors:
        INVOICE_NOT_FOUND: invoice missing or owned by another user
    """

    def __init__(self, invoice_repo: InvoiceRepository, receipt_repo: ReceiptRepository):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(self, invoice_id: str, user_id: str) -> Result[InvoiceDetailDTO]:
        invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
        if not invoice:
            return Return.err(invoice_not_found(invoice_id))

        receipts = await self.receipt_repo.list_by_invoice_id(invoice.id)
        paid_amount = sum_receipt_amounts(receipts)

        return Return.ok(
            InvoiceDetailDTO(
                invoice=to_invoice_dto(invoice, paid_amount=paid_amount),
                receipts=[to_receipt_dto(receipt) for receipt in receipts],
            )
        )


class GetRemainingBalance:
    """Get Remaining Balance Use Case"""

    def __init__(self, invoice_repo: InvoiceRepository, receipt_repo: ReceiptRepository):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(self, invoice_id: str, user_id: str) -> Result[RemainingBalanceDTO]:
        invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
        if not invoice:
            return Return.err(invoice_not_found(invoice_id))

        paid_amount = await self.receipt_repo.sum_by_invoice_id(invoice.id)
        remaining = remaining_balance(invoice.total, paid_amount)

        return Return.ok(
            RemainingBalanceDTO(
                invoice_id=invoice.id,
                currency=invoice.currency.value,
                total=invoice.total,
                paid_amount=paid_amount,
                remaining_amount=remaining,
                formatted_remaining_amount=format_currency(remaining, invoice.currency),
                status=invoice.status.value,
            )
        )
