"""Unit tests for DeleteReceipt use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.invoicing.delete_receipt import DeleteReceipt
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def delete_receipt_use_case(mock_uow, mock_invoice_repo, mock_receipt_repo):
    return DeleteReceipt(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        receipt_repo=mock_receipt_repo,
    )


@pytest.mark.asyncio
class TestDeleteReceipt:

    async def test_delete_recalculates_from_remaining_ledger(
        self, delete_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_uow, make_invoice, make_receipt
    ):
        """
        Given: Paid invoice (1000) with receipts of 600 and 400
        When: The 400 receipt is deleted
        Then: paid_amount is 600 and status partially_paid
        """
        # Arrange
        receipt = make_receipt(id="rcpt_400", amount=Decimal("400.00"))
        invoice = make_invoice(paid_amount=Decimal("1000.00"), status=InvoiceStatus.PAID)
        mock_receipt_repo.get_by_id = AsyncMock(return_value=receipt)
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)
        mock_receipt_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("600.00"))

        # Act
        result = await delete_receipt_use_case.execute("rcpt_400", "user_123")

        # Assert
        assert result.is_ok()
        assert result.value.receipt_id == "rcpt_400"
        assert result.value.invoice.paid_amount == Decimal("600.00")
        assert result.value.invoice.status == "partially_paid"
        mock_receipt_repo.delete.assert_called_once_with(receipt)
        mock_invoice_repo.get_for_owner.assert_called_once_with("inv_1", "user_123", for_update=True)
        mock_uow.commit.assert_called_once()

    async def test_deleting_last_receipt_returns_to_pending(
        self, delete_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_invoice, make_receipt
    ):
        mock_receipt_repo.get_by_id = AsyncMock(return_value=make_receipt())
        mock_invoice_repo.get_for_owner = AsyncMock(
            return_value=make_invoice(paid_amount=Decimal("400.00"), status=InvoiceStatus.PARTIALLY_PAID)
        )
        mock_receipt_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("0"))

        result = await delete_receipt_use_case.execute("rcpt_1", "user_123")

        assert result.value.invoice.status == "pending"
        assert result.value.invoice.paid_amount == Decimal("0")

    async def test_receipt_not_found(self, delete_receipt_use_case, mock_receipt_repo):
        mock_receipt_repo.get_by_id = AsyncMock(return_value=None)

        result = await delete_receipt_use_case.execute("missing", "user_123")

        assert result.error.code == "RECEIPT_NOT_FOUND"

    async def test_receipt_of_another_user_is_not_found(
        self, delete_receipt_use_case, mock_invoice_repo, mock_receipt_repo, make_receipt
    ):
        """
        Given: A receipt whose invoice belongs to another user
        When: The current user deletes it
        Then: RECEIPT_NOT_FOUND and nothing is deleted
        """
        mock_receipt_repo.get_by_id = AsyncMock(return_value=make_receipt())
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=None)

        result = await delete_receipt_use_case.execute("rcpt_1", "intruder")

        assert result.error.code == "RECEIPT_NOT_FOUND"
        mock_receipt_repo.delete.assert_not_called()

    async def test_unexpected_error_rolls_back(
        self, delete_receipt_use_case, mock_invoice_repo, mock_receipt_repo, mock_uow, make_invoice, make_receipt
    ):
        mock_receipt_repo.get_by_id = AsyncMock(return_value=make_receipt())
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_receipt_repo.delete = AsyncMock(side_effect=RuntimeError("boom"))

        result = await delete_receipt_use_case.execute("rcpt_1", "user_123")

        assert result.error.code == "DELETE_RECEIPT_FAILED"
        assert result.error.reason == "boom"
        mock_uow.rollback.assert_called_once()
