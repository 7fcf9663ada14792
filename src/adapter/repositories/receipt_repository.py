"""SQLAlchemy Receipt Repository Implementation

Implements the payment ledger using SQLAlchemy async session.
"""

from decimal import Decimal
from typing import Optional, List, Tuple
from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.invoice import Invoice
from src.domain.receipt import Receipt


class SqlAlchemyReceiptRepository(ReceiptRepository):
    """
    SQLAlchemy implementation of ReceiptRepository

    Features:
    - Unique receipt_number enforced by the database
    - Ledger sums computed in SQL
    - Hard deletes
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, receipt: Receipt) -> Receipt:
        self.session.add(receipt)
        await self.session.flush()
        await self.session.refresh(receipt)
        return receipt

    async def get_by_id(self, receipt_id: str) -> Optional[Receipt]:
        stmt = select(Receipt).where(Receipt.id == receipt_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_invoice_id(self, invoice_id: str) -> List[Receipt]:
        stmt = (
            select(Receipt)
            .where(Receipt.invoice_id == invoice_id)
            .order_by(Receipt.payment_date.desc(), Receipt.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: str) -> List[Tuple[Receipt, Invoice]]:
        stmt = (
            select(Receipt, Invoice)
            .join(Invoice, Receipt.invoice_id == Invoice.id)
            .where(Invoice.user_id == user_id)
            .order_by(Receipt.payment_date.desc(), Receipt.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def sum_by_invoice_id(self, invoice_id: str) -> Decimal:
        """
        Sum of receipt amounts for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Decimal sum (0 if the invoice has no receipts)
        """
        stmt = select(func.sum(Receipt.amount)).where(Receipt.invoice_id == invoice_id)
        result = await self.session.execute(stmt)
        total = result.scalar_one_or_none()
        if total is None:
            return Decimal("0")
        return Decimal(str(total))

    async def delete(self, receipt: Receipt) -> None:
        await self.session.delete(receipt)
        await self.session.flush()

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        stmt = (
            delete(Receipt)
            .where(Receipt.invoice_id == invoice_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount
