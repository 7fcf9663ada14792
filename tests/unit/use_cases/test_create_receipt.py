"""Unit tests for CreateReceipt use case

Tests cover:
- Partial and full payments derive the invoice status
- Overpayment guard
- Cancelled invoices reject payments
- Validation before any transaction work
- Notification is best-effort
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from src.app.use_cases.invoicing.create_receipt import CreateReceipt
from src.app.use_cases.invoicing.dtos import CreateReceiptCommandDTO
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def create_receipt_use_case(mock_uow, mock_invoice_repo, mock_receipt_repo, mock_sequence_repo, mock_notifier):
    return CreateReceipt(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        receipt_repo=mock_receipt_repo,
        sequence_repo=mock_sequence_repo,
        notifier=mock_notifier,
    )


def make_command(amount="400.00", **overrides):
    data = {
        "invoice_id": "inv_1",
        "user_id": "user_123",
        "amount": amount,
        "payment_method": "bank_transfer",
        "payment_date": date(2026, 10, 5),
    }
    data.update(overrides)
    return CreateReceiptCommandDTO(**data)


@pytest.mark.asyncio
class TestCreateReceiptSuccess:
    """Test recording payments"""

    async def test_partial_payment_sets_partially_paid(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_sequence_repo, mock_uow, make_invoice
    ):
        """
        Given: Invoice total 1000 with no receipts
        When: A receipt of 400 is recorded
        Then: paid_amount is 400, status partially_paid, 600 remaining
        """
        # Arrange
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])
        mock_sequence_repo.next_value = AsyncMock(return_value=1)

        # Act
        result = await create_receipt_use_case.execute(make_command("400"))

        # Assert
        assert result.is_ok()
        assert result.value.invoice.paid_amount == Decimal("400.00")
        assert result.value.invoice.status == "partially_paid"
        assert result.value.remaining_amount == Decimal("600.00")
        assert result.value.receipt.receipt_number == "RCPT-000001"
        assert result.value.receipt.currency == "USD"
        mock_invoice_repo.get_for_owner.assert_called_once_with("inv_1", "user_123", for_update=True)
        mock_uow.commit.assert_called_once()

    async def test_second_payment_settles_invoice(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice, make_receipt
    ):
        """
        Given: Invoice total 1000 with a 400 receipt
        When: A receipt of 600 is recorded
        Then: Invoice is paid with nothing remaining
        """
        # Arrange
        invoice = make_invoice(paid_amount=Decimal("400.00"), status=InvoiceStatus.PARTIALLY_PAID)
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)
        mock_receipt_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_receipt(amount=Decimal("400.00"))]
        )

        # Act
        result = await create_receipt_use_case.execute(make_command("600"))

        # Assert
        assert result.is_ok()
        assert result.value.invoice.status == "paid"
        assert result.value.invoice.paid_amount == Decimal("1000.00")
        assert result.value.remaining_amount == Decimal("0")

    async def test_paid_amount_comes_from_ledger_not_cache(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice, make_receipt
    ):
        """
        Given: Cached paid_amount is stale (0) but the ledger holds 300
        When: A receipt of 200 is recorded
        Then: paid_amount is 500
        """
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice(paid_amount=Decimal("0")))
        mock_receipt_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_receipt(amount=Decimal("300.00"))]
        )

        result = await create_receipt_use_case.execute(make_command("200"))

        assert result.value.invoice.paid_amount == Decimal("500.00")

    async def test_payment_date_defaults_to_today(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])

        result = await create_receipt_use_case.execute(make_command("100", payment_date=None))

        assert result.value.receipt.payment_date == date.today()

    async def test_overdue_invoice_accepts_payment(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice
    ):
        """
        Given: An overdue invoice
        When: A partial payment is recorded
        Then: Status is re-derived as partially_paid
        """
        mock_invoice_repo.get_for_owner = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.OVERDUE)
        )
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.value.invoice.status == "partially_paid"

    async def test_notifies_client_after_commit(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_notifier, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])

        await create_receipt_use_case.execute(make_command("100"))

        mock_notifier.payment_received.assert_called_once()

    async def test_notification_failure_does_not_fail_payment(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_notifier, make_invoice
    ):
        """
        Given: The notifier reports a failed delivery
        When: A receipt is recorded
        Then: The receipt is still committed and returned
        """
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])
        mock_notifier.payment_received = AsyncMock(return_value=False)

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.is_ok()
        assert result.value.invoice.paid_amount == Decimal("100.00")


@pytest.mark.asyncio
class TestCreateReceiptOverpayment:
    """Test overpayment guard"""

    async def test_rejects_overpayment(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_uow, make_invoice, make_receipt
    ):
        """
        Given: Invoice total 1000 with 900 already received
        When: A receipt of 200 is recorded
        Then: OVERPAYMENT error, no receipt created, transaction rolled back
        """
        # Arrange
        invoice = make_invoice(paid_amount=Decimal("900.00"), status=InvoiceStatus.PARTIALLY_PAID)
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)
        mock_receipt_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_receipt(amount=Decimal("900.00"))]
        )

        # Act
        result = await create_receipt_use_case.execute(make_command("200"))

        # Assert
        assert result.is_err()
        assert result.error.code == "OVERPAYMENT"
        assert result.error.details == {"attempted_total": "1100.00", "allowed_total": "1000.00"}
        mock_receipt_repo.create.assert_not_called()
        mock_invoice_repo.update.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_exact_remaining_amount_is_accepted(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice, make_receipt
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_receipt(amount=Decimal("900.00"))]
        )

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.is_ok()
        assert result.value.invoice.status == "paid"

    async def test_overpayment_allowed_when_enabled(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice, make_receipt
    ):
        """
        Given: Invoice allows overpayment, 900 of 1000 received
        When: A receipt of 200 is recorded
        Then: Invoice is paid and remaining is negative
        """
        mock_invoice_repo.get_for_owner = AsyncMock(
            return_value=make_invoice(allow_overpayment=True)
        )
        mock_receipt_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_receipt(amount=Decimal("900.00"))]
        )

        result = await create_receipt_use_case.execute(make_command("200"))

        assert result.is_ok()
        assert result.value.invoice.status == "paid"
        assert result.value.remaining_amount == Decimal("-100.00")


@pytest.mark.asyncio
class TestCreateReceiptRejections:
    """Test inputs and invoices that cannot take a payment"""

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "NaN", "Infinity", "0.001", "400.005"])
    async def test_invalid_amount_is_validation_error(
        self, create_receipt_use_case, mock_invoice_repo, amount
    ):
        """
        Given: A non-positive, non-numeric, non-finite or sub-cent amount
        When: execute is called
        Then: VALIDATION_ERROR without touching the invoice
        """
        mock_invoice_repo.get_for_owner = AsyncMock()

        result = await create_receipt_use_case.execute(make_command(amount))

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"field": "amount"}
        mock_invoice_repo.get_for_owner.assert_not_called()

    async def test_blank_payment_method_is_validation_error(self, create_receipt_use_case):
        result = await create_receipt_use_case.execute(make_command("100", payment_method="   "))

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == {"field": "payment_method"}

    async def test_invoice_not_found(self, create_receipt_use_case, mock_invoice_repo):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=None)

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_cancelled_invoice_rejects_payment(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_uow, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.CANCELLED)
        )
        mock_receipt_repo.list_by_invoice_id = AsyncMock()

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.error.code == "INVOICE_CANCELLED"
        mock_receipt_repo.list_by_invoice_id.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_database_error_maps_to_persistence_error(
        self, create_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_uow, mock_notifier, make_invoice
    ):
        """
        Given: The receipt insert fails in the database
        When: execute is called
        Then: PERSISTENCE_ERROR, rolled back, no notification
        """
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.list_by_invoice_id = AsyncMock(return_value=[])
        mock_receipt_repo.create = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("database is locked"))
        )

        result = await create_receipt_use_case.execute(make_command("100"))

        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
        mock_notifier.payment_received.assert_not_called()
