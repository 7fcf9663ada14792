from .unit_of_work import SqlAlchemyUnitOfWork
from .notification_service import (
    LoggingNotificationService,
    MailtrapNotificationService,
    create_notification_service,
)
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingNotificationService",
    "MailtrapNotificationService",
    "create_notification_service",
    "ReportLabPdfService",
]
