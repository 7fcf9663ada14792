"""Payment Reconciliation Background Worker

Periodically repairs every invoice's paid amount and status from its
receipt ledger. Can be run as a standalone script or under a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.receipt_repository import SqlAlchemyReceiptRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    ReconcileInvoicePayments,
    ReconciliationResultDTO,
    SyncInvoicePayments,
)

logger = logging.getLogger(__name__)


class PaymentReconcilerWorker:
    """
    Background worker for invoice payment reconciliation

    Features:
    - Recomputes paid amounts from receipts
    - Rewrites only invoices that drifted
    - Can run once or continuously

    Usage:
        worker = PaymentReconcilerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(self, db_uri: Optional[str] = None):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("PaymentReconcilerWorker initialized")

    async def run_once(self) -> ReconciliationResultDTO:
        """
        Run reconciliation once

        Returns:
            ReconciliationResultDTO with repaired invoices

        Raises:
            RuntimeError: if the reconciliation run itself failed
        """
        if not getattr(ApplicationConfig, "RECONCILIATION_ENABLED", True):
            logger.info("Payment reconciliation is disabled, skipping")
            return ReconciliationResultDTO(
                total_invoices_checked=0,
                invoices_repaired=0,
                repairs=[],
                failed_invoice_ids=[],
                reconciliation_time=datetime.utcnow(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            invoice_repo = SqlAlchemyInvoiceRepository(session)
            receipt_repo = SqlAlchemyReceiptRepository(session)

            use_case = ReconcileInvoicePayments(
                invoice_repo=invoice_repo,
                sync_invoice_payments=SyncInvoicePayments(
                    uow=SqlAlchemyUnitOfWork(session),
                    invoice_repo=invoice_repo,
                    receipt_repo=receipt_repo,
                ),
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Reconciliation failed: {result.error.message}")
                raise RuntimeError(f"Reconciliation failed: {result.error.message}")

            response = result.value

            for repair in response.repairs:
                logger.warning(
                    f"  - Invoice {repair.invoice_id}: "
                    f"paid {repair.previous_paid_amount} -> {repair.paid_amount}, "
                    f"status {repair.previous_status} -> {repair.status}"
                )
            if response.failed_invoice_ids:
                logger.error(
                    f"ALERT: {len(response.failed_invoice_ids)} invoices could not be reconciled"
                )

            return response

    async def run_forever(self, interval_seconds: Optional[int] = None):
        interval_seconds = interval_seconds or ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS
        logger.info(
            f"Starting continuous payment reconciliation with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"Checked {result.total_invoices_checked} invoices, "
                    f"repaired {result.invoices_repaired} "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("PaymentReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.payment_reconciler --once
        python -m src.worker.payment_reconciler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Payment Reconciliation Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=None,
        help="Interval between runs in seconds (default: RECONCILIATION_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = PaymentReconcilerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Reconciliation complete:")
            print(f"  Total invoices checked: {result.total_invoices_checked}")
            print(f"  Invoices repaired: {result.invoices_repaired}")
            print(f"  Failed: {len(result.failed_invoice_ids)}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
