"""PDF Generation Service Interface

Defines the contract for rendering invoice and receipt documents.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List
from src.domain.invoice import Invoice
from src.domain.receipt import Receipt


class PdfService(ABC):
    """
    Service interface for PDF generation

    Pure presentation: callers pass already computed amounts.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        receipts: List[Receipt],
        paid_amount: Decimal,
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice to render
            receipts: Ledger of the invoice
            paid_amount: Ledger sum used for the remaining balance
            company_name: Issuer name shown in the header
            company_address: Issuer address shown in the header

        Returns:
            PDF document as bytes
        """
        pass

    @abstractmethod
    def generate_receipt(
        self,
        receipt: Receipt,
        invoice: Invoice,
        paid_amount: Decimal,
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Generate a receipt PDF

        Args:
            receipt: Receipt to render
            invoice: Parent invoice
            paid_amount: Ledger sum of the parent invoice
            company_name: Issuer name shown in the header
            company_address: Issuer address shown in the header

        Returns:
            PDF document as bytes
        """
        pass
