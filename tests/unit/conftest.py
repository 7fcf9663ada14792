import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.invoice import Invoice, InvoiceStatus, Currency
from src.domain.receipt import Receipt


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository; update returns the entity it was given"""
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_receipt_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda receipt: receipt)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_sequence_repo():
    repo = MagicMock()
    repo.next_value = AsyncMock(return_value=1001)
    return repo


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.invoice_created = AsyncMock(return_value=True)
    notifier.invoice_updated = AsyncMock(return_value=True)
    notifier.invoice_reminder = AsyncMock(return_value=True)
    notifier.payment_received = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def make_invoice():
    """Factory for Invoice entities with sensible defaults"""

    def _make(**overrides):
        data = {
            "id": "inv_1",
            "user_id": "user_123",
            "invoice_number": 1001,
            "invoice_name": "Website redesign",
            "status": InvoiceStatus.PENDING,
            "total": Decimal("1000.00"),
            "paid_amount": Decimal("0"),
            "currency": Currency.USD,
            "allow_overpayment": False,
            "from_name": "Acme Studio",
            "from_email": "billing@acme.test",
            "from_address": "Plot 1, Kampala Road",
            "client_name": "Jane Client",
            "client_email": "jane@client.test",
            "client_address": "Plot 9, Jinja Road",
            "invoice_item_description": "Design work",
            "invoice_item_quantity": 1,
            "invoice_item_rate": Decimal("1000.00"),
            "issue_date": date(2026, 10, 1),
            "due_date": 14,
            "created_at": datetime(2026, 10, 1, 9, 0, 0),
            "updated_at": datetime(2026, 10, 1, 9, 0, 0),
        }
        data.update(overrides)
        return Invoice(**data)

    return _make


@pytest.fixture
def make_receipt():
    """Factory for Receipt entities with sensible defaults"""

    def _make(**overrides):
        data = {
            "id": "rcpt_1",
            "receipt_number": "RCPT-000001",
            "invoice_id": "inv_1",
            "amount": Decimal("400.00"),
            "currency": Currency.USD,
            "payment_date": date(2026, 10, 5),
            "payment_method": "bank_transfer",
            "created_at": datetime(2026, 10, 5, 10, 0, 0),
        }
        data.update(overrides)
        return Receipt(**data)

    return _make
