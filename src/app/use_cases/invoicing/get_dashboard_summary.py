"""Get Dashboard Summary Use Case

Aggregates a user's invoices and receipts per currency.
"""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional, List
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.invoice import Currency, Invoice, InvoiceStatus
from src.domain.money import format_currency
from src.domain.payment_status import remaining_balance
from src.domain.receipt import Receipt
from .dtos import CurrencySummaryDTO, DashboardSummaryDTO
from .mappers import to_invoice_dto, to_receipt_dto

RECENT_ITEMS = 5

# Not counted as outstanding
SETTLED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.CANCELLED)


def _is_overdue(invoice: Invoice, today: date) -> bool:
    if invoice.status == InvoiceStatus.OVERDUE:
        return True
    if invoice.status in SETTLED_STATUSES or invoice.status == InvoiceStatus.DRAFT:
        return False
    return invoice.is_past_due(today)


class GetDashboardSummary:
    """
    Get Dashboard Summary Use Case

    Amounts in different currencies are never added together: every figure
    is reported per currency.

    - total_invoiced: sum of invoice totals
    - total_received: sum of receipt amounts
    - total_outstanding: total - paid_amount over invoices not paid or cancelled
    - overdue_count: overdue invoices, including unpaid ones past due that
      the sweep has not reached yet
    """

    def __init__(self, invoice_repo: InvoiceRepository, receipt_repo: ReceiptRepository):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo

    async def execute(self, user_id: str, today: Optional[date] = None) -> Result[DashboardSummaryDTO]:
        today = today or date.today()

        invoices = await self.invoice_repo.list_all_by_user(user_id)
        receipt_rows = await self.receipt_repo.list_by_user(user_id)
        receipts = [receipt for receipt, _ in receipt_rows]

        currencies: List[CurrencySummaryDTO] = []
        for currency in Currency:
            currency_invoices = [i for i in invoices if i.currency == currency]
            currency_receipts = [r for r in receipts if r.currency == currency]
            if not currency_invoices and not currency_receipts:
                continue
            currencies.append(
                self._summarise(currency, currency_invoices, currency_receipts, today)
            )

        status_counts = Counter(invoice.status.value for invoice in invoices)

        return Return.ok(
            DashboardSummaryDTO(
                user_id=user_id,
                total_invoices=len(invoices),
                total_receipts=len(receipts),
                status_counts=dict(status_counts),
                currencies=currencies,
                recent_invoices=[to_invoice_dto(i) for i in invoices[:RECENT_ITEMS]],
                recent_receipts=[
                    to_receipt_dto(receipt, invoice)
                    for receipt, invoice in receipt_rows[:RECENT_ITEMS]
                ],
            )
        )

    def _summarise(
        self,
        currency: Currency,
        invoices: List[Invoice],
        receipts: List[Receipt],
        today: date,
    ) -> CurrencySummaryDTO:
        total_invoiced = sum((Decimal(i.total) for i in invoices), Decimal("0"))
        total_received = sum((Decimal(r.amount) for r in receipts), Decimal("0"))
        total_outstanding = sum(
            (
                remaining_balance(Decimal(i.total), Decimal(i.paid_amount))
                for i in invoices
                if i.status not in SETTLED_STATUSES
            ),
            Decimal("0"),
        )

        return CurrencySummaryDTO(
            currency=currency.value,
            invoice_count=len(invoices),
            receipt_count=len(receipts),
            total_invoiced=total_invoiced,
            total_received=total_received,
            total_outstanding=total_outstanding,
            overdue_count=sum(1 for i in invoices if _is_overdue(i, today)),
            formatted_total_invoiced=format_currency(total_invoiced, currency),
            formatted_total_received=format_currency(total_received, currency),
            formatted_total_outstanding=format_currency(total_outstanding, currency),
        )
