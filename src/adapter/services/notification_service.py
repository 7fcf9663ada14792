"""Notification Service Implementations

Provides concrete implementations for sending templated client emails.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
import httpx
from src.app.services.notification_service import NotificationService, NotificationTemplate

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs emails instead of sending them

    Useful for development and testing, or as a fallback.
    """

    async def send_template(
        self, recipient_email: str, template: NotificationTemplate, variables: Dict[str, Any]
    ) -> bool:
        """
        Log templated email

        Returns:
            Always True (logging never fails)
        """
        logger.info(
            f"[EMAIL] To: {recipient_email}, Template: {template.value}, "
            f"Variables: {variables}"
        )
        return True


class MailtrapNotificationService(NotificationService):
    """
    Notification service that sends template emails via the Mailtrap send API

    Each template maps to a Mailtrap template uuid. Failed requests are
    retried with exponential backoff before giving up.
    """

    def __init__(
        self,
        api_url: str,
        token: str,
        sender_email: str,
        sender_name: str,
        template_ids: Dict[NotificationTemplate, str],
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
    ):
        """
        Initialize Mailtrap notification service

        Args:
            api_url: Mailtrap send endpoint
            token: API token (Bearer)
            sender_email: From address
            sender_name: From display name
            template_ids: Template uuid per NotificationTemplate
            timeout: Request timeout in seconds
            max_retries: Attempts per email
            backoff_seconds: Delay before the first retry, doubled each time
        """
        self.api_url = api_url
        self.token = token
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.template_ids = template_ids
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff_seconds = backoff_seconds

    def build_payload(
        self, recipient_email: str, template_uuid: str, variables: Dict[str, Any]
    ) -> Dict[str, Any]:
        return {
            "from": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": recipient_email}],
            "template_uuid": template_uuid,
            "template_variables": variables,
        }

    async def send_template(
        self, recipient_email: str, template: NotificationTemplate, variables: Dict[str, Any]
    ) -> bool:
        """
        Send templated email via Mailtrap

        Returns:
            True if Mailtrap accepted the email, False otherwise
        """
        template_uuid = self.template_ids.get(template)
        if not template_uuid:
            logger.error(f"No Mailtrap template configured for {template.value}")
            return False

        payload = self.build_payload(recipient_email, template_uuid, variables)
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

        for attempt in range(1, self.max_retries + 1):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, json=payload, headers=headers)
                    response.raise_for_status()
                logger.info(f"{template.value} email sent to {recipient_email}")
                return True
            except httpx.HTTPError as e:
                logger.warning(
                    f"Attempt {attempt}/{self.max_retries} to send {template.value} "
                    f"email to {recipient_email} failed: {e}"
                )

            if attempt < self.max_retries:
                await asyncio.sleep(self.backoff_seconds * (2 ** (attempt - 1)))

        logger.error(
            f"Giving up on {template.value} email to {recipient_email} "
            f"after {self.max_retries} attempts"
        )
        return False


def create_notification_service(config: Optional[Any] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        config: ApplicationConfig-like object. When it carries a MAILTRAP_TOKEN,
                emails are sent through Mailtrap; otherwise they are only logged.

    Returns:
        Configured NotificationService
    """
    token = getattr(config, "MAILTRAP_TOKEN", None) if config else None
    if not token:
        return LoggingNotificationService()

    template_ids = {
        NotificationTemplate.INVOICE_CREATED: config.INVOICE_CREATED_TEMPLATE,
        NotificationTemplate.INVOICE_UPDATED: config.INVOICE_UPDATED_TEMPLATE,
        NotificationTemplate.PAYMENT_RECEIVED: config.PAYMENT_RECEIVED_TEMPLATE,
        NotificationTemplate.INVOICE_REMINDER: config.INVOICE_REMINDER_TEMPLATE,
    }

    return MailtrapNotificationService(
        api_url=config.MAILTRAP_API_URL,
        token=token,
        sender_email=config.MAIL_SENDER_EMAIL,
        sender_name=config.MAIL_SENDER_NAME,
        template_ids=template_ids,
        timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
        max_retries=config.NOTIFICATION_MAX_RETRIES,
    )
