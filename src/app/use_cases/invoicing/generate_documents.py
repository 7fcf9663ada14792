"""PDF document use cases

Render invoices and receipts with balances taken from the receipt ledger.
"""

from libs.result import Result, Return, Error
from src.app.services.pdf_service import PdfService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.domain.receipt import sum_receipt_amounts
from .dtos import PdfDocumentDTO
from .errors import invoice_not_found, receipt_not_found


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Flow:
    1. Get invoice for the owner
    2. Get its receipts and sum them
    3. Render PDF
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        receipt_repo: ReceiptRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
    ):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, invoice_id: str, user_id: str) -> Result[PdfDocumentDTO]:
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 2: Ledger
            receipts = await self.receipt_repo.list_by_invoice_id(invoice.id)

            # Step 3: Generate PDF
            content = self.pdf_service.generate_invoice(
                invoice=invoice,
                receipts=receipts,
                paid_amount=sum_receipt_amounts(receipts),
                company_name=self.company_name,
                company_address=self.company_address,
            )

            return Return.ok(
                PdfDocumentDTO(filename=f"invoice-{invoice.invoice_number}.pdf", content=content)
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )


class GenerateReceiptPdf:
    """Use Case: Generate receipt PDF"""

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        receipt_repo: ReceiptRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
    ):
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, receipt_id: str, user_id: str) -> Result[PdfDocumentDTO]:
        try:
            receipt = await self.receipt_repo.get_by_id(receipt_id)
            if not receipt:
                return Return.err(receipt_not_found(receipt_id))

            invoice = await self.invoice_repo.get_for_owner(receipt.invoice_id, user_id)
            if not invoice:
                return Return.err(receipt_not_found(receipt_id))

            paid_amount = await self.receipt_repo.sum_by_invoice_id(invoice.id)

            content = self.pdf_service.generate_receipt(
                receipt=receipt,
                invoice=invoice,
                paid_amount=paid_amount,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            return Return.ok(
                PdfDocumentDTO(filename=f"receipt-{receipt.receipt_number}.pdf", content=content)
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_RECEIPT_PDF_FAILED",
                    message="Failed to generate receipt PDF",
                    reason=str(e),
                )
            )
