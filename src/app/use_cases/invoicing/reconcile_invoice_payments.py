"""ReconcileInvoicePayments Use Case

Runs the ledger repair over every invoice in the system.
"""

import logging
import time
from datetime import datetime
from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import ReconciliationResultDTO, SyncResultDTO
from .sync_invoice_payments import SyncInvoicePayments

logger = logging.getLogger(__name__)


class ReconcileInvoicePayments:
    """
    Use Case: Reconcile all invoices against their receipt ledgers

    Business Rules:
    1. Each invoice is repaired in its own transaction (SyncInvoicePayments)
    2. A failure on one invoice is recorded and the run continues
    3. Invoices already in sync are not written

    Flow:
    1. Get all invoice ids
    2. Sync each invoice
    3. Return repaired invoices and failures
    """

    def __init__(self, invoice_repo: InvoiceRepository, sync_invoice_payments: SyncInvoicePayments):
        self.invoice_repo = invoice_repo
        self.sync_invoice_payments = sync_invoice_payments

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            logger.info("Starting invoice payment reconciliation")

            # Step 1: Get all invoices
            invoice_ids = await self.invoice_repo.list_ids()
            logger.info(f"Found {len(invoice_ids)} invoices to reconcile")

            # Step 2: Repair each one
            repairs: List[SyncResultDTO] = []
            failed: List[str] = []

            for invoice_id in invoice_ids:
                result = await self.sync_invoice_payments.execute(invoice_id)
                if result.is_err():
                    logger.error(
                        f"Failed to reconcile invoice {invoice_id}: "
                        f"{result.error.code} {result.error.reason or result.error.message}"
                    )
                    failed.append(invoice_id)
                    continue

                if result.value.changed:
                    repairs.append(result.value)

            # Step 3: Build response
            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                total_invoices_checked=len(invoice_ids),
                invoices_repaired=len(repairs),
                repairs=repairs,
                failed_invoice_ids=failed,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if repairs:
                logger.warning(
                    f"Reconciliation complete. Repaired {len(repairs)} of "
                    f"{len(invoice_ids)} invoices in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {len(invoice_ids)} invoices in sync "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Invoice reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile invoice payments",
                    reason=str(e),
                )
            )
