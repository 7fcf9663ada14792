"""Unit tests for Invoice and Receipt domain entities"""

from datetime import date
from decimal import Decimal
from src.domain.invoice import InvoiceStatus, Currency
from src.domain.money import format_currency
from src.domain.number_sequence import format_receipt_number
from src.domain.receipt import sum_receipt_amounts


class TestInvoiceDueDate:
    """Test due day calculation"""

    def test_due_on_adds_net_days(self, make_invoice):
        invoice = make_invoice(issue_date=date(2026, 10, 1), due_date=30)
        assert invoice.due_on() == date(2026, 10, 31)

    def test_due_on_same_day_when_net_zero(self, make_invoice):
        invoice = make_invoice(issue_date=date(2026, 10, 1), due_date=0)
        assert invoice.due_on() == date(2026, 10, 1)

    def test_is_past_due(self, make_invoice):
        """
        Given: An invoice due on 15 October
        When: Checked on the due day and the day after
        Then: It is only past due the day after
        """
        invoice = make_invoice(issue_date=date(2026, 10, 1), due_date=14)

        assert invoice.is_past_due(date(2026, 10, 15)) is False
        assert invoice.is_past_due(date(2026, 10, 16)) is True

    def test_defaults(self, make_invoice):
        invoice = make_invoice()
        assert invoice.status == InvoiceStatus.PENDING
        assert invoice.currency == Currency.USD
        assert invoice.allow_overpayment is False


class TestReceiptLedger:

    def test_sum_receipt_amounts(self, make_receipt):
        receipts = [
            make_receipt(id="r1", amount=Decimal("600.00")),
            make_receipt(id="r2", amount=Decimal("400.00")),
        ]
        assert sum_receipt_amounts(receipts) == Decimal("1000.00")

    def test_sum_of_empty_ledger_is_zero(self):
        assert sum_receipt_amounts([]) == Decimal("0")


class TestFormatting:

    def test_format_receipt_number(self):
        assert format_receipt_number("RCPT", 1) == "RCPT-000001"
        assert format_receipt_number("RCPT", 1234567) == "RCPT-1234567"

    def test_format_ugx_has_no_minor_unit(self):
        assert format_currency(Decimal("1500000"), Currency.UGX) == "USh 1,500,000"

    def test_format_usd(self):
        assert format_currency(Decimal("1000"), "USD") == "$1,000.00"

    def test_format_negative(self):
        assert format_currency(Decimal("-12.5"), "USD") == "-$12.50"

    def test_format_unknown_currency(self):
        assert format_currency(Decimal("5"), "EUR") == "EUR 5.00"
