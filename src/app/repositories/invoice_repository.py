"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Sequence
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Reads that precede a write of paid_amount/status accept for_update=True
    so the invoice row stays write-locked until commit. The lock is taken
    before the row is read, on every backend.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID regardless of owner

        Only used by system jobs (reconciliation, sweeps).

        Args:
            invoice_id: Invoice ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_for_owner(
        self, invoice_id: str, user_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by ID scoped to its owner

        Args:
            invoice_id: Invoice ID
            user_id: Owning user
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Invoice if found and owned by user_id, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve a user's invoices, newest first

        Args:
            user_id: Owning user
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def list_all_by_user(self, user_id: str) -> List[Invoice]:
        """Retrieve every invoice of a user (dashboard aggregates)"""
        pass

    @abstractmethod
    async def list_by_statuses(self, statuses: Sequence[InvoiceStatus]) -> List[Invoice]:
        """
        Retrieve invoices across all users in any of the given statuses

        Used by the overdue sweep.
        """
        pass

    @abstractmethod
    async def list_ids(self) -> List[str]:
        """Retrieve all invoice IDs (used by payment reconciliation)"""
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def update_status_bulk(
        self,
        invoice_ids: Sequence[str],
        status: InvoiceStatus,
        from_statuses: Sequence[InvoiceStatus],
    ) -> List[str]:
        """
        Set status on many invoices in one statement

        Rows whose status is no longer one of from_statuses when the
        statement runs are left alone.

        Args:
            invoice_ids: Candidate invoice IDs
            status: New status
            from_statuses: Statuses a row must still have to be updated

        Returns:
            IDs of the rows actually updated
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """Delete an invoice row"""
        pass

    @abstractmethod
    async def search_clients(self, user_id: str, term: str, limit: int = 10) -> List[Invoice]:
        """
        Find invoices whose client name or email contains term

        One invoice per distinct client email.
        """
        pass
