"""Integration tests for the invoice payment flow

Tests cover:
- Invoice numbering from the sequence table
- Receipts update paid amount and status in the database
- Overpayment leaves the ledger untouched
- Concurrent payments are serialised on the invoice row
- Deleting receipts and invoices
- Sync, reconciliation and the overdue sweep against real rows
"""

import asyncio
import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.number_sequence_repository import SqlAlchemyNumberSequenceRepository
from src.adapter.repositories.receipt_repository import SqlAlchemyReceiptRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    CreateInvoice,
    CreateReceipt,
    DeleteInvoice,
    DeleteReceipt,
    EditInvoice,
    MarkOverdueInvoices,
    ReconcileInvoicePayments,
    SyncInvoicePayments,
)
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    CreateReceiptCommandDTO,
    EditInvoiceCommandDTO,
)
from src.domain.invoice import InvoiceStatus


INVOICE_FIELDS = {
    "invoice_name": "Website redesign",
    "total": Decimal("1000.00"),
    "currency": "USD",
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
}


def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


class Repos:
    def __init__(self, session: AsyncSession):
        self.uow = SqlAlchemyUnitOfWork(session)
        self.invoices = SqlAlchemyInvoiceRepository(session)
        self.receipts = SqlAlchemyReceiptRepository(session)
        self.sequences = SqlAlchemyNumberSequenceRepository(session)


async def create_invoice(repos: Repos, **overrides):
    command = CreateInvoiceCommandDTO(**dict(INVOICE_FIELDS, user_id="user_123", **overrides))
    result = await CreateInvoice(repos.uow, repos.invoices, repos.sequences).execute(command)
    assert result.is_ok(), result.error
    return result.value


async def pay(repos: Repos, invoice_id: str, amount: str):
    command = CreateReceiptCommandDTO(
        invoice_id=invoice_id,
        user_id="user_123",
        amount=amount,
        payment_method="bank_transfer",
        payment_date=date(2026, 10, 5),
    )
    return await CreateReceipt(
        repos.uow, repos.invoices, repos.receipts, repos.sequences
    ).execute(command)


@pytest.mark.asyncio
class TestPaymentFlowIntegration:
    """Integration tests with real database"""

    async def test_invoice_numbers_are_sequential(self, db_session: AsyncSession):
        repos = Repos(db_session)

        first = await create_invoice(repos)
        second = await create_invoice(repos)

        assert first.invoice_number == 1001
        assert second.invoice_number == 1002

    async def test_partial_then_full_payment(self, db_session: AsyncSession):
        """
        Test complete flow: create invoice, pay 400, pay 600, verify database state
        """
        # Arrange
        repos = Repos(db_session)
        invoice = await create_invoice(repos)

        # Act
        first = await pay(repos, invoice.id, "400")
        second = await pay(repos, invoice.id, "600")

        # Assert
        assert first.value.invoice.status == "partially_paid"
        assert first.value.receipt.receipt_number == "RCPT-000001"
        assert second.value.invoice.status == "paid"
        assert second.value.receipt.receipt_number == "RCPT-000002"

        stored = await repos.invoices.get_by_id(invoice.id)
        assert stored.paid_amount == Decimal("1000.00")
        assert stored.status == InvoiceStatus.PAID
        assert await repos.receipts.sum_by_invoice_id(invoice.id) == Decimal("1000.00")

    async def test_overpayment_leaves_ledger_untouched(self, db_session: AsyncSession):
        """
        Test overpayment: 900 paid on 1000, then 200 rejected
        """
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        await pay(repos, invoice.id, "900")

        result = await pay(repos, invoice.id, "200")

        assert result.error.code == "OVERPAYMENT"
        assert len(await repos.receipts.list_by_invoice_id(invoice.id)) == 1
        stored = await repos.invoices.get_by_id(invoice.id)
        assert stored.paid_amount == Decimal("900.00")
        assert stored.status == InvoiceStatus.PARTIALLY_PAID

    async def test_delete_receipt_recalculates(self, db_session: AsyncSession):
        """
        Test deleting the 400 receipt of 600 + 400 leaves 600 partially paid
        """
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        await pay(repos, invoice.id, "600")
        second = await pay(repos, invoice.id, "400")

        result = await DeleteReceipt(repos.uow, repos.invoices, repos.receipts).execute(
            second.value.receipt.id, "user_123"
        )

        assert result.value.invoice.paid_amount == Decimal("600.00")
        assert result.value.invoice.status == "partially_paid"
        assert await repos.receipts.get_by_id(second.value.receipt.id) is None

    async def test_edit_total_below_paid_settles_invoice(self, db_session: AsyncSession):
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        await pay(repos, invoice.id, "600")

        command = EditInvoiceCommandDTO(
            **dict(INVOICE_FIELDS, total=Decimal("500.00"), invoice_id=invoice.id, user_id="user_123")
        )
        result = await EditInvoice(repos.uow, repos.invoices, repos.receipts).execute(command)

        assert result.value.status == "paid"
        assert result.value.paid_amount == Decimal("600.00")
        assert result.value.invoice_number == invoice.invoice_number

    async def test_delete_invoice_removes_receipts(self, db_session: AsyncSession):
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        await pay(repos, invoice.id, "100")
        await pay(repos, invoice.id, "200")

        result = await DeleteInvoice(repos.uow, repos.invoices, repos.receipts).execute(
            invoice.id, "user_123"
        )

        assert result.value.receipts_deleted == 2
        assert await repos.invoices.get_by_id(invoice.id) is None
        assert await repos.receipts.list_by_invoice_id(invoice.id) == []

    async def test_sync_repairs_drift_once(self, db_session: AsyncSession):
        """
        Test sync: corrupt the cached aggregate, sync twice, only the first writes
        """
        # Arrange - corrupt the cache behind the ledger's back
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        await pay(repos, invoice.id, "400")
        stored = await repos.invoices.get_by_id(invoice.id)
        stored.paid_amount = Decimal("0")
        stored.status = InvoiceStatus.PENDING
        await repos.invoices.update(stored)
        await db_session.commit()

        sync = SyncInvoicePayments(repos.uow, repos.invoices, repos.receipts)

        # Act
        first = await sync.execute(invoice.id, "user_123")
        second = await sync.execute(invoice.id, "user_123")

        # Assert
        assert first.value.changed is True
        assert first.value.paid_amount == Decimal("400.00")
        assert first.value.status == "partially_paid"
        assert second.value.changed is False

    async def test_reconcile_all_invoices(self, db_session: AsyncSession):
        repos = Repos(db_session)
        drifted = await create_invoice(repos)
        await create_invoice(repos)
        await pay(repos, drifted.id, "250")
        stored = await repos.invoices.get_by_id(drifted.id)
        stored.paid_amount = Decimal("999")
        await repos.invoices.update(stored)
        await db_session.commit()

        use_case = ReconcileInvoicePayments(
            repos.invoices, SyncInvoicePayments(repos.uow, repos.invoices, repos.receipts)
        )
        result = await use_case.execute()

        assert result.value.total_invoices_checked == 2
        assert result.value.invoices_repaired == 1
        assert result.value.repairs[0].invoice_id == drifted.id
        assert result.value.repairs[0].paid_amount == Decimal("250.00")

    async def test_overdue_sweep_and_payment_after_sweep(self, db_session: AsyncSession):
        """
        Test sweep: pending and partially paid invoices past due become overdue,
        drafts are left alone, a later payment re-derives the status
        """
        # Arrange
        repos = Repos(db_session)
        pending = await create_invoice(repos)
        partial = await create_invoice(repos)
        draft = await create_invoice(repos, status=InvoiceStatus.DRAFT)
        not_due = await create_invoice(repos, issue_date=date(2026, 10, 18))
        await pay(repos, partial.id, "100")

        # Act
        sweep = await MarkOverdueInvoices(repos.uow, repos.invoices).execute(today=date(2026, 10, 20))

        # Assert
        assert sorted(sweep.value.invoice_ids) == sorted([pending.id, partial.id])
        assert (await repos.invoices.get_by_id(draft.id)).status == InvoiceStatus.DRAFT
        assert (await repos.invoices.get_by_id(not_due.id)).status == InvoiceStatus.PENDING

        payment = await pay(repos, pending.id, "1000")
        assert payment.value.invoice.status == "paid"

    async def test_concurrent_payments_cannot_overpay(self, engine, db_session: AsyncSession):
        """
        Test two 600 payments racing on a 1000 invoice from separate sessions:
        one succeeds, the other sees the committed ledger and is rejected
        """
        # Arrange
        invoice = await create_invoice(Repos(db_session))
        Session = session_factory(engine)

        # Act
        async with Session() as first, Session() as second:
            results = await asyncio.gather(
                pay(Repos(first), invoice.id, "600"),
                pay(Repos(second), invoice.id, "600"),
            )

        # Assert
        outcomes = sorted("OK" if result.is_ok() else result.error.code for result in results)
        assert outcomes == ["OK", "OVERPAYMENT"]

        async with Session() as check:
            repos = Repos(check)
            stored = await repos.invoices.get_by_id(invoice.id)
            assert await repos.receipts.sum_by_invoice_id(invoice.id) == Decimal("600.00")
            assert stored.paid_amount == Decimal("600.00")
            assert stored.status == InvoiceStatus.PARTIALLY_PAID

    async def test_sweep_keeps_payment_committed_after_its_read(
        self, engine, db_session: AsyncSession
    ):
        """
        Test a full payment committed between the sweep's candidate read and
        its UPDATE: the invoice stays paid and is not reported as swept
        """
        # Arrange
        repos = Repos(db_session)
        invoice = await create_invoice(repos)
        Session = session_factory(engine)
        read_candidates = repos.invoices.list_by_statuses

        async def read_then_pay(statuses):
            candidates = await read_candidates(statuses)
            async with Session() as other:
                payment = await pay(Repos(other), invoice.id, "1000")
                assert payment.is_ok()
            return candidates

        repos.invoices.list_by_statuses = read_then_pay

        # Act
        sweep = await MarkOverdueInvoices(repos.uow, repos.invoices).execute(today=date(2026, 10, 20))

        # Assert
        assert sweep.value.processed == 0
        assert sweep.value.invoice_ids == []
        async with Session() as check:
            stored = await Repos(check).invoices.get_by_id(invoice.id)
            assert stored.status == InvoiceStatus.PAID
            assert stored.paid_amount == Decimal("1000.00")
