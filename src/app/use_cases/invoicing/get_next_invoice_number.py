"""Get Next Invoice Number Use Case"""

from libs.result import Result, Return
from src.app.repositories.number_sequence_repository import NumberSequenceRepository
from src.domain.number_sequence import INVOICE_NUMBER_SEQUENCE
from .dtos import NextInvoiceNumberDTO


class GetNextInvoiceNumber:
    """
    Preview of the number the next created invoice will most likely get

    Does not consume the sequence; CreateInvoice allocates the real number,
    which differs if another invoice is created in between.
    """

    def __init__(self, sequence_repo: NumberSequenceRepository, invoice_number_start: int = 1001):
        self.sequence_repo = sequence_repo
        self.invoice_number_start = invoice_number_start

    async def execute(self) -> Result[NextInvoiceNumberDTO]:
        next_number = await self.sequence_repo.peek_next_value(
            INVOICE_NUMBER_SEQUENCE, start=self.invoice_number_start
        )
        return Return.ok(NextInvoiceNumberDTO(next_invoice_number=next_number))
