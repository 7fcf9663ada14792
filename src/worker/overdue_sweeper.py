"""Overdue Sweep Background Worker

Moves pending and partially paid invoices past their due day to overdue.
"""

import asyncio
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import MarkOverdueInvoices, OverdueSweepResultDTO

logger = logging.getLogger(__name__)


class OverdueSweeperWorker:
    """
    Background worker for the overdue sweep

    Usage:
        worker = OverdueSweeperWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(self, db_uri: Optional[str] = None):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("OverdueSweeperWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> OverdueSweepResultDTO:
        if not getattr(ApplicationConfig, "OVERDUE_SWEEP_ENABLED", True):
            logger.info("Overdue sweep is disabled, skipping")
            return OverdueSweepResultDTO(
                processed=0, invoice_ids=[], sweep_date=today or date.today()
            )

        async with self.async_session_factory() as session:
            use_case = MarkOverdueInvoices(
                uow=SqlAlchemyUnitOfWork(session),
                invoice_repo=SqlAlchemyInvoiceRepository(session),
            )

            result = await use_case.execute(today=today)

            if result.is_err():
                logger.error(f"Overdue sweep failed: {result.error.message}")
                raise RuntimeError(f"Overdue sweep failed: {result.error.message}")

            return result.value

    async def run_forever(self, interval_seconds: Optional[int] = None):
        interval_seconds = interval_seconds or ApplicationConfig.OVERDUE_SWEEP_INTERVAL_SECONDS
        logger.info(f"Starting continuous overdue sweep with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Overdue sweep complete. Marked {result.processed} invoices overdue"
                )
            except Exception as e:
                logger.error(f"Overdue sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueSweeperWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.overdue_sweeper --once
        python -m src.worker.overdue_sweeper --interval 600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Sweep Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=None,
        help="Interval between runs in seconds (default: OVERDUE_SWEEP_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = OverdueSweeperWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print(f"Overdue sweep complete: {result.processed} invoices marked overdue")
            for invoice_id in result.invoice_ids:
                print(f"  - {invoice_id}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
