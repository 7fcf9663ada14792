from .unit_of_work import UnitOfWork
from .notification_service import NotificationService, NotificationTemplate
from .pdf_service import PdfService
from .invoice_notifier import InvoiceNotifier

__all__ = [
    "UnitOfWork",
    "NotificationService",
    "NotificationTemplate",
    "PdfService",
    "InvoiceNotifier",
]
