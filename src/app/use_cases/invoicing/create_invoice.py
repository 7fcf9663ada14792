"""CreateInvoice Use Case

Creates an invoice with a sequence-allocated number and notifies the client.
"""

import logging
from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.number_sequence_repository import NumberSequenceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.number_sequence import INVOICE_NUMBER_SEQUENCE
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .errors import persistence_error, validation_error
from .mappers import to_invoice_dto
from .validation import validate_invoice_fields

logger = logging.getLogger(__name__)

CREATABLE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.PENDING)


class CreateInvoice:
    """
    Use Case: Create an invoice

    Business Rules:
    1. Initial status is draft or pending; payments only come from receipts
    2. paid_amount starts at 0
    3. invoice_number is allocated from the invoice number sequence, never
       supplied by the caller
    4. The client is notified after commit; a failed notification does not
       fail the operation

    Flow:
    1. Validate fields and initial status
    2. Allocate invoice number
    3. Create invoice
    4. Commit transaction
    5. Send invoice_created notification
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        sequence_repo: NumberSequenceRepository,
        notifier: Optional[InvoiceNotifier] = None,
        invoice_number_start: int = 1001,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.sequence_repo = sequence_repo
        self.notifier = notifier
        self.invoice_number_start = invoice_number_start

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        # Step 1: Validate
        error = validate_invoice_fields(command)
        if error:
            return Return.err(error)

        if command.status not in CREATABLE_STATUSES:
            return Return.err(
                validation_error(
                    f"Invoices can only be created as draft or pending, got {command.status.value}",
                    field="status",
                )
            )

        try:
            # Step 2: Allocate invoice number
            invoice_number = await self.sequence_repo.next_value(
                INVOICE_NUMBER_SEQUENCE, start=self.invoice_number_start
            )

            # Step 3: Create invoice
            invoice = Invoice(
                user_id=command.user_id,
                invoice_number=invoice_number,
                invoice_name=command.invoice_name.strip(),
                status=command.status,
                total=Decimal(command.total),
                paid_amount=Decimal("0"),
                currency=command.currency,
                allow_overpayment=command.allow_overpayment,
                from_name=command.from_name,
                from_email=command.from_email,
                from_address=command.from_address,
                client_name=command.client_name,
                client_email=command.client_email,
                client_address=command.client_address,
                invoice_item_description=command.invoice_item_description,
                invoice_item_quantity=command.invoice_item_quantity,
                invoice_item_rate=Decimal(command.invoice_item_rate),
                issue_date=command.issue_date,
                due_date=command.due_date,
                note=command.note,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            # Step 4: Commit transaction
            await self.uow.commit()

        except SQLAlchemyError as e:
            await self.uow.rollback()
            logger.error(f"Failed to persist invoice for user {command.user_id}: {e}")
            return Return.err(persistence_error(e))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

        logger.info(
            f"Invoice #{created_invoice.invoice_number} ({created_invoice.id}) created "
            f"for user {created_invoice.user_id}"
        )

        # Step 5: Notify client (best-effort)
        if self.notifier:
            await self.notifier.invoice_created(created_invoice)

        return Return.ok(to_invoice_dto(created_invoice))
