"""Notification Service Interface

Defines the contract for sending templated notifications to invoice clients.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict


class NotificationTemplate(str, Enum):
    """Templated notifications sent to clients"""
    INVOICE_CREATED = "invoice_created"
    INVOICE_UPDATED = "invoice_updated"
    PAYMENT_RECEIVED = "payment_received"
    INVOICE_REMINDER = "invoice_reminder"


class NotificationService(ABC):
    """
    Abstract notification service

    Implementations can deliver via:
    - Email provider HTTP API (Mailtrap)
    - Application log
    - Several channels at once
    """

    @abstractmethod
    async def send_template(
        self,
        recipient_email: str,
        template: NotificationTemplate,
        variables: Dict[str, Any],
    ) -> bool:
        """
        Send a templated notification

        Args:
            recipient_email: Address of the client
            template: Which template to render
            variables: Template variables

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
