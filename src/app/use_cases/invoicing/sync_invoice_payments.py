"""SyncInvoicePayments Use Case

Repairs an invoice's cached paid_amount and status from its receipt ledger.
"""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.payment_status import reconcile_status
from .dtos import SyncResultDTO
from .errors import invoice_not_found, persistence_error

logger = logging.getLogger(__name__)


class SyncInvoicePayments:
    """
    Use Case: Sync invoice payments with the receipt ledger

    Business Rules:
    1. paid_amount is recomputed as the ledger sum
    2. status follows reconcile_status: cancelled is kept, draft and overdue
       are kept unless the ledger settles the invoice, the rest is derived
    3. Idempotent: nothing is written when both values already match, so a
       second call performs no write
    4. user_id scopes the lookup to an owner; None is system scope (workers)
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

    async def execute(self, invoice_id: str, user_id: Optional[str] = None) -> Result[SyncResultDTO]:
        try:
            # Step 1: Get invoice with pessimistic lock
            if user_id is None:
                invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            else:
                invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id, for_update=True)

            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 2: Recompute from ledger
            ledger_sum = await self.receipt_repo.sum_by_invoice_id(invoice.id)
            target_status = reconcile_status(invoice.status, invoice.total, ledger_sum)

            previous_paid_amount = invoice.paid_amount
            previous_status = invoice.status

            # Step 3: Write only on drift
            changed = previous_paid_amount != ledger_sum or previous_status != target_status
            if changed:
                logger.warning(
                    f"Invoice {invoice.id} out of sync with its receipts: "
                    f"paid_amount {previous_paid_amount} -> {ledger_sum}, "
                    f"status {previous_status.value} -> {target_status.value}"
                )
                invoice.paid_amount = ledger_sum
                invoice.status = target_status
                await self.invoice_repo.update(invoice)
                await self.uow.commit()
            else:
                await self.uow.rollback()

            return Return.ok(
                SyncResultDTO(
                    invoice_id=invoice_id,
                    changed=changed,
                    previous_paid_amount=previous_paid_amount,
                    paid_amount=ledger_sum,
                    previous_status=previous_status.value,
                    status=target_status.value,
                )
            )

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to sync invoice {invoice_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SYNC_INVOICE_PAYMENTS_FAILED",
                    message="Failed to sync invoice payments",
                    reason=str(e),
                )
            )
