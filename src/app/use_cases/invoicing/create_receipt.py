"""CreateReceipt Use Case

Records a payment against an invoice with an overpayment guard and
pessimistic locking so concurrent partial payments cannot exceed the total.
"""

import logging
from datetime import date
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.receipt_repository import ReceiptRepository
from src.app.repositories.number_sequence_repository import NumberSequenceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.number_sequence import RECEIPT_NUMBER_SEQUENCE, format_receipt_number
from src.domain.payment_status import derive_status, remaining_balance
from src.domain.receipt import Receipt, sum_receipt_amounts
from .dtos import CreateReceiptCommandDTO, CreateReceiptResponseDTO
from .errors import (
    INVOICE_CANCELLED,
    invoice_not_found,
    overpayment_error,
    persistence_error,
    validation_error,
)
from .mappers import to_invoice_dto, to_receipt_dto
from .validation import parse_amount

logger = logging.getLogger(__name__)


class CreateReceipt:
    """
    Use Case: Record a payment (receipt) against an invoice

    Business Rules:
    1. amount must be a finite number > 0 and payment_method non-blank;
       checked before any transaction work
    2. Pessimistic locking: the invoice row is locked (SELECT FOR UPDATE)
       before the ledger is read, serialising payments per invoice
    3. Overpayment guard: ledger sum + amount may not exceed total unless
       the invoice allows overpayment
    4. Atomic updates: receipt insert, paid_amount and status change in a
       single transaction
    5. Cancelled invoices accept no payments
    6. The payment_received notification is sent after commit and never
       affects the result

    Flow:
    1. Validate amount and payment method
    2. Get invoice with lock (SELECT FOR UPDATE)
    3. Sum the fetched receipt ledger
    4. Check overpayment
    5. Allocate receipt number
    6. Create receipt
    7. Update invoice paid_amount and derived status
    8. Commit transaction
    9. Send payment_received notification
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        receipt_repo: ReceiptRepository,
        sequence_repo: NumberSequenceRepository,
        notifier: Optional[InvoiceNotifier] = None,
        receipt_number_prefix: str = "RCPT",
        receipt_number_start: int = 1,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.receipt_repo = receipt_repo
        self.sequence_repo = sequence_repo
        self.notifier = notifier
        self.receipt_number_prefix = receipt_number_prefix
        self.receipt_number_start = receipt_number_start

    async def execute(self, command: CreateReceiptCommandDTO) -> Result[CreateReceiptResponseDTO]:
        """
        Execute receipt creation

        Args:
            command: CreateReceiptCommandDTO with invoice_id, user_id, amount, payment details

        Returns:
            Result[CreateReceiptResponseDTO]: updated invoice, new receipt and remaining amount

        Errors:
            VALIDATION_ERROR: bad amount or payment method
            INVOICE_NOT_FOUND: invoice missing or owned by another user
            INVOICE_CANCELLED: invoice is cancelled
            OVERPAYMENT: payment would push the ledger above total
        """
        # Step 1: Validate before touching the database
        amount = parse_amount(command.amount)
        if amount is None:
            return Return.err(
                validation_error(
                    "amount must be a number greater than 0 with at most two decimal places",
                    field="amount",
                )
            )

        payment_method = (command.payment_method or "").strip()
        if not payment_method:
            return Return.err(validation_error("payment_method is required", field="payment_method"))

        try:
            # Step 2: Get invoice with pessimistic lock (SELECT FOR UPDATE)
            invoice = await self.invoice_repo.get_for_owner(
                command.invoice_id, command.user_id, for_update=True
            )
            if not invoice:
                return Return.err(invoice_not_found(command.invoice_id))

            if invoice.status == InvoiceStatus.CANCELLED:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=INVOICE_CANCELLED,
                        message=f"Invoice {command.invoice_id} is cancelled and cannot accept payments",
                    )
                )

            # Step 3: Ledger sum read under the lock
            receipts = await self.receipt_repo.list_by_invoice_id(invoice.id)
            previous_total = sum_receipt_amounts(receipts)
            new_total = previous_total + amount

            # Step 4: Overpayment guard
            if new_total > invoice.total and not invoice.allow_overpayment:
                allowed_total = invoice.total
                await self.uow.rollback()
                logger.info(
                    f"Rejected overpayment on invoice {command.invoice_id}: "
                    f"attempted_total={new_total}, allowed_total={allowed_total}"
                )
                return Return.err(overpayment_error(new_total, allowed_total))

            # Step 5: Allocate receipt number
            sequence_value = await self.sequence_repo.next_value(
                RECEIPT_NUMBER_SEQUENCE, start=self.receipt_number_start
            )

            # Step 6: Create receipt
            receipt = Receipt(
                receipt_number=format_receipt_number(self.receipt_number_prefix, sequence_value),
                invoice_id=invoice.id,
                amount=amount,
                currency=invoice.currency,
                payment_date=command.payment_date or date.today(),
                payment_method=payment_method,
                reference=command.reference,
                note=command.note,
            )
            created_receipt = await self.receipt_repo.create(receipt)

            # Step 7: Update cached aggregate and derived status
            invoice.paid_amount = new_total
            invoice.status = derive_status(invoice.total, new_total)
            updated_invoice = await self.invoice_repo.update(invoice)

            # Step 8: Commit transaction
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to record receipt for invoice {command.invoice_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_RECEIPT_FAILED",
                    message="Failed to create receipt",
                    reason=str(e),
                )
            )

        logger.info(
            f"Receipt {created_receipt.receipt_number} of {amount} recorded for invoice "
            f"{updated_invoice.id}, status={updated_invoice.status.value}"
        )

        # Step 9: Notify client (best-effort)
        if self.notifier:
            await self.notifier.payment_received(updated_invoice, created_receipt)

        return Return.ok(
            CreateReceiptResponseDTO(
                invoice=to_invoice_dto(updated_invoice),
                receipt=to_receipt_dto(created_receipt),
                remaining_amount=remaining_balance(updated_invoice.total, updated_invoice.paid_amount),
            )
        )
