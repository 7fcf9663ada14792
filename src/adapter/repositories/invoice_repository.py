"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Sequence
from datetime import datetime
from sqlalchemy import update, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Owner scoped lookups
    - Pessimistic locking for payment writes

    Locking reads first touch the row with a no-op UPDATE. On PostgreSQL that
    takes the same row lock as SELECT FOR UPDATE; on SQLite, which has no row
    locks and ignores FOR UPDATE, it opens the write transaction so a second
    writer waits before reading the receipt ledger.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def _lock_row(self, invoice_id: str, user_id: Optional[str] = None) -> None:
        stmt = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(updated_at=Invoice.updated_at)
            .execution_options(synchronize_session=False)
        )
        if user_id is not None:
            stmt = stmt.where(Invoice.user_id == user_id)
        await self.session.execute(stmt)

    async def get_by_id(self, invoice_id: str, for_update: bool = False) -> Optional[Invoice]:
        stmt = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            await self._lock_row(invoice_id)
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_owner(
        self, invoice_id: str, user_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by ID and owner with optional row-level locking

        Args:
            invoice_id: Invoice ID
            user_id: Owning user
            for_update: If True, write-locks the row before reading it and
                        refreshes any copy already in the session (serialises
                        concurrent payments against the same invoice)

        Returns:
            Invoice if found, None otherwise
        """
        stmt = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
        )

        if for_update:
            await self._lock_row(invoice_id, user_id)
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        statement = select(Invoice).where(Invoice.user_id == user_id)

        if status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_all_by_user(self, user_id: str) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .order_by(Invoice.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_statuses(self, statuses: Sequence[InvoiceStatus]) -> List[Invoice]:
        statement = select(Invoice).where(Invoice.status.in_(list(statuses)))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_ids(self) -> List[str]:
        statement = select(Invoice.id).order_by(Invoice.created_at)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def update_status_bulk(
        self,
        invoice_ids: Sequence[str],
        status: InvoiceStatus,
        from_statuses: Sequence[InvoiceStatus],
    ) -> List[str]:
        if not invoice_ids:
            return []

        # Status is re-checked by the UPDATE itself; a payment committed since
        # the candidates were read keeps its status
        statement = (
            update(Invoice)
            .where(Invoice.id.in_(list(invoice_ids)))
            .where(Invoice.status.in_(list(from_statuses)))
            .values(status=status, updated_at=datetime.utcnow())
            .returning(Invoice.id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def search_clients(self, user_id: str, term: str, limit: int = 10) -> List[Invoice]:
        pattern = f"%{term}%"
        statement = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .where(
                or_(
                    Invoice.client_name.ilike(pattern),
                    Invoice.client_email.ilike(pattern),
                )
            )
            .order_by(Invoice.created_at.desc())
        )
        result = await self.session.execute(statement)

        # Distinct on client email, keeping the most recent invoice
        clients: List[Invoice] = []
        seen = set()
        for invoice in result.scalars().all():
            key = invoice.client_email.lower()
            if key in seen:
                continue
            seen.add(key)
            clients.append(invoice)
            if len(clients) >= limit:
                break
        return clients
