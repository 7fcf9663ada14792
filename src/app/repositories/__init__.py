from .invoice_repository import InvoiceRepository
from .receipt_repository import ReceiptRepository
from .number_sequence_repository import NumberSequenceRepository

__all__ = [
    "InvoiceRepository",
    "ReceiptRepository",
    "NumberSequenceRepository",
]
