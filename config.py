import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    DB_CREATE_TABLES = bool(data.get("DB_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    DEFAULT_USER_ID = data.get("DEFAULT_USER_ID", "dev-user")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Public links embedded in notifications
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:8000")

    # Numbering
    INVOICE_NUMBER_START = data.get("INVOICE_NUMBER_START", 1001)
    RECEIPT_NUMBER_PREFIX = data.get("RECEIPT_NUMBER_PREFIX", "RCPT")
    RECEIPT_NUMBER_START = data.get("RECEIPT_NUMBER_START", 1)

    # Email notifications (Mailtrap send API)
    MAIL_SENDER_EMAIL = data.get("MAIL_SENDER_EMAIL", "billing@example.com")
    MAIL_SENDER_NAME = data.get("MAIL_SENDER_NAME", "Billing")
    MAILTRAP_API_URL = data.get("MAILTRAP_API_URL", "https://send.api.mailtrap.io/api/send")
    MAILTRAP_TOKEN = data.get("MAILTRAP_TOKEN", "")
    INVOICE_CREATED_TEMPLATE = data.get("INVOICE_CREATED_TEMPLATE", "")
    INVOICE_UPDATED_TEMPLATE = data.get("INVOICE_UPDATED_TEMPLATE", "")
    PAYMENT_RECEIVED_TEMPLATE = data.get("PAYMENT_RECEIVED_TEMPLATE", "")
    INVOICE_REMINDER_TEMPLATE = data.get("INVOICE_REMINDER_TEMPLATE", "")
    NOTIFICATION_MAX_RETRIES = data.get("NOTIFICATION_MAX_RETRIES", 3)
    NOTIFICATION_TIMEOUT_SECONDS = data.get("NOTIFICATION_TIMEOUT_SECONDS", 10.0)

    # Documents
    COMPANY_NAME = data.get("COMPANY_NAME", "Invoicing Service")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "Kampala, Central Region, Uganda")

    # Overdue Sweep Configuration
    OVERDUE_SWEEP_ENABLED = bool(data.get("OVERDUE_SWEEP_ENABLED", True))
    OVERDUE_SWEEP_INTERVAL_SECONDS = data.get("OVERDUE_SWEEP_INTERVAL_SECONDS", 3600)  # Hourly

    # Payment Reconciliation Configuration
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
