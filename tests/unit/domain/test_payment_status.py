"""Unit tests for payment status rules"""

import pytest
from decimal import Decimal
from src.domain.invoice import InvoiceStatus
from src.domain.payment_status import (
    DERIVED_STATUSES,
    derive_status,
    reconcile_status,
    remaining_balance,
)


class TestDeriveStatus:
    """Test status derived from total and paid amount"""

    @pytest.mark.parametrize(
        "paid, expected",
        [
            ("0", InvoiceStatus.PENDING),
            ("0.01", InvoiceStatus.PARTIALLY_PAID),
            ("999.99", InvoiceStatus.PARTIALLY_PAID),
            ("1000.00", InvoiceStatus.PAID),
            ("1200.00", InvoiceStatus.PAID),
        ],
    )
    def test_derive_status_boundaries(self, paid, expected):
        assert derive_status(Decimal("1000.00"), Decimal(paid)) == expected

    def test_negative_paid_amount_is_pending(self):
        assert derive_status(Decimal("100"), Decimal("-5")) == InvoiceStatus.PENDING


class TestReconcileStatus:
    """Test status kept when repairing from the ledger"""

    def test_cancelled_is_always_kept(self):
        """
        Given: A cancelled invoice whose ledger covers the total
        When: reconcile_status is computed
        Then: Status stays cancelled
        """
        result = reconcile_status(InvoiceStatus.CANCELLED, Decimal("100"), Decimal("100"))
        assert result == InvoiceStatus.CANCELLED

    @pytest.mark.parametrize("current", [InvoiceStatus.DRAFT, InvoiceStatus.OVERDUE])
    def test_external_status_kept_until_settled(self, current):
        assert reconcile_status(current, Decimal("100"), Decimal("40")) == current
        assert reconcile_status(current, Decimal("100"), Decimal("0")) == current

    @pytest.mark.parametrize("current", [InvoiceStatus.DRAFT, InvoiceStatus.OVERDUE])
    def test_external_status_becomes_paid_when_settled(self, current):
        assert reconcile_status(current, Decimal("100"), Decimal("100")) == InvoiceStatus.PAID

    def test_derived_status_is_recomputed(self):
        """
        Given: An invoice marked paid but the ledger only holds part of the total
        When: reconcile_status is computed
        Then: Status drops back to partially_paid
        """
        result = reconcile_status(InvoiceStatus.PAID, Decimal("1000"), Decimal("600"))
        assert result == InvoiceStatus.PARTIALLY_PAID

    @pytest.mark.parametrize("current", sorted(DERIVED_STATUSES))
    def test_every_derived_status_follows_the_ledger(self, current):
        assert reconcile_status(current, Decimal("100"), Decimal("0")) == InvoiceStatus.PENDING
        assert reconcile_status(current, Decimal("100"), Decimal("40")) == InvoiceStatus.PARTIALLY_PAID
        assert reconcile_status(current, Decimal("100"), Decimal("100")) == InvoiceStatus.PAID


class TestRemainingBalance:

    def test_remaining_balance(self):
        assert remaining_balance(Decimal("1000"), Decimal("400")) == Decimal("600")

    def test_remaining_balance_negative_on_overpayment(self):
        assert remaining_balance(Decimal("1000"), Decimal("1200")) == Decimal("-200")
