"""Receipt Repository Interface

Defines the contract for receipt (payment ledger) persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, List, Tuple
from src.domain.invoice import Invoice
from src.domain.receipt import Receipt


class ReceiptRepository(ABC):
    """
    Repository interface for Receipt persistence

    Receipts are immutable and hard deleted. The sum of an invoice's
    receipts is the authoritative paid amount.
    """

    @abstractmethod
    async def create(self, receipt: Receipt) -> Receipt:
        """
        Create a new receipt

        Args:
            receipt: Receipt entity to persist

        Returns:
            Created Receipt

        Raises:
            IntegrityError: If receipt_number already exists
        """
        pass

    @abstractmethod
    async def get_by_id(self, receipt_id: str) -> Optional[Receipt]:
        """
        Retrieve receipt by ID

        Args:
            receipt_id: Receipt ID

        Returns:
            Receipt if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_invoice_id(self, invoice_id: str) -> List[Receipt]:
        """
        Retrieve the ledger of an invoice, most recent payment first

        Args:
            invoice_id: Invoice ID

        Returns:
            List of receipts
        """
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Tuple[Receipt, Invoice]]:
        """
        Retrieve every receipt on invoices owned by user_id

        Returns:
            List of (receipt, parent invoice) pairs, most recent payment first
        """
        pass

    @abstractmethod
    async def sum_by_invoice_id(self, invoice_id: str) -> Decimal:
        """
        Sum of receipt amounts for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Decimal sum, 0 when the invoice has no receipts
        """
        pass

    @abstractmethod
    async def delete(self, receipt: Receipt) -> None:
        """Delete a receipt row"""
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Delete every receipt of an invoice

        Returns:
            Number of receipts deleted
        """
        pass
