from .invoice_repository import SqlAlchemyInvoiceRepository
from .receipt_repository import SqlAlchemyReceiptRepository
from .number_sequence_repository import SqlAlchemyNumberSequenceRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyReceiptRepository",
    "SqlAlchemyNumberSequenceRepository",
]
