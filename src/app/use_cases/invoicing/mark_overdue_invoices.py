"""MarkOverdueInvoices Use Case

Moves unpaid invoices past their due day to overdue.
"""

import logging
from datetime import date
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import OverdueSweepResultDTO
from .errors import persistence_error

logger = logging.getLogger(__name__)

SWEPT_STATUSES = (InvoiceStatus.PENDING, InvoiceStatus.PARTIALLY_PAID)


class MarkOverdueInvoices:
    """
    Use Case: Overdue sweep

    Business Rules:
    1. Only pending and partially_paid invoices are candidates
    2. An invoice is overdue when issue_date + due_date days is before today
    3. All candidates are updated in one transaction, and only while they are
       still pending or partially_paid (a payment committed after the read wins)
    4. A later payment moves the invoice back to a derived status
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, today: Optional[date] = None) -> Result[OverdueSweepResultDTO]:
        sweep_date = today or date.today()

        try:
            candidates = await self.invoice_repo.list_by_statuses(SWEPT_STATUSES)
            overdue_ids = [invoice.id for invoice in candidates if invoice.is_past_due(sweep_date)]

            updated_ids = []
            if overdue_ids:
                updated_ids = await self.invoice_repo.update_status_bulk(
                    overdue_ids, InvoiceStatus.OVERDUE, from_statuses=SWEPT_STATUSES
                )
                await self.uow.commit()
                logger.info(f"Updated {len(updated_ids)} invoices to overdue status")
            else:
                await self.uow.rollback()

            return Return.ok(
                OverdueSweepResultDTO(
                    processed=len(updated_ids),
                    invoice_ids=updated_ids,
                    sweep_date=sweep_date,
                )
            )

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Overdue sweep failed: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Overdue sweep failed: {e}")
            return Return.err(
                Error(
                    code="MARK_OVERDUE_INVOICES_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )
