"""Invoice API Routes

FastAPI routes for invoice operations, the receipts recorded against an
invoice, and invoice documents.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.invoice_request import CreateInvoiceRequestSchema, InvoiceRequestSchema
from src.api.schemas.receipt_request import ReceiptRequestSchema
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoicing import (
    CancelInvoice,
    CreateInvoice,
    CreateReceipt,
    DeleteInvoice,
    EditInvoice,
    GenerateInvoicePdf,
    GetInvoice,
    GetNextInvoiceNumber,
    GetRemainingBalance,
    ListInvoices,
    ListReceipts,
    MarkInvoicePaid,
    SearchClients,
    SendInvoiceReminder,
    SyncInvoicePayments,
)
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    CreateReceiptCommandDTO,
    CreateReceiptResponseDTO,
    DeleteInvoiceResponseDTO,
    EditInvoiceCommandDTO,
    InvoiceDetailDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    ListReceiptsResponseDTO,
    MarkPaidResponseDTO,
    NextInvoiceNumberDTO,
    ReminderResultDTO,
    RemainingBalanceDTO,
    SearchClientsResponseDTO,
    SyncResultDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.receipt_repository import SqlAlchemyReceiptRepository
from src.adapter.repositories.number_sequence_repository import SqlAlchemyNumberSequenceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_invoice_notifier, get_pdf_service
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _raise_for(result):
    if result.is_err():
        raise ClientError.from_error(result.error)


@router.post("", response_model=InvoiceResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    notifier: InvoiceNotifier = Depends(get_invoice_notifier),
):
    """
    Create an invoice.

    The invoice number is allocated by the server. The client receives an
    invoice_created email after the invoice is saved.

    **Returns:**
    - 201: Invoice created
    - 400: Validation error
    """
    command = CreateInvoiceCommandDTO(
        user_id=user_id,
        status=InvoiceStatus(request.status),
        **request.model_dump(exclude={"status"}),
    )

    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyNumberSequenceRepository(session),
        notifier=notifier,
        invoice_number_start=ApplicationConfig.INVOICE_NUMBER_START,
    )
    result = await use_case.execute(command)
    _raise_for(result)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """List the current user's invoices, newest first."""
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(user_id, status=status_filter, limit=limit, offset=offset)
    _raise_for(result)

    return result.value


@router.get("/next-number", response_model=NextInvoiceNumberDTO)
async def get_next_invoice_number(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Preview the next invoice number without reserving it."""
    use_case = GetNextInvoiceNumber(
        SqlAlchemyNumberSequenceRepository(session),
        invoice_number_start=ApplicationConfig.INVOICE_NUMBER_START,
    )
    result = await use_case.execute()
    _raise_for(result)

    return result.value


@router.get("/clients", response_model=SearchClientsResponseDTO)
async def search_clients(
    q: str = Query(default="", max_length=255, description="Name or email fragment (min 2 chars)"),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Search clients from the current user's previous invoices."""
    use_case = SearchClients(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(user_id, q)
    _raise_for(result)

    return result.value


@router.get("/{invoice_id}", response_model=InvoiceDetailDTO)
async def get_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Get an invoice with its receipts.

    Paid and remaining amounts are computed from the receipts.

    **Returns:**
    - 200: Invoice detail
    - 404: Invoice not found
    """
    use_case = GetInvoice(SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session))
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.put("/{invoice_id}", response_model=InvoiceResponseDTO)
async def edit_invoice(
    invoice_id: str,
    request: InvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    notifier: InvoiceNotifier = Depends(get_invoice_notifier),
):
    """
    Replace an invoice's fields.

    Status and paid amount are recalculated from the receipts, so lowering
    the total below what was already paid marks the invoice paid.
    """
    command = EditInvoiceCommandDTO(invoice_id=invoice_id, user_id=user_id, **request.model_dump())

    use_case = EditInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
        notifier=notifier,
    )
    result = await use_case.execute(command)
    _raise_for(result)

    return result.value


@router.delete("/{invoice_id}", response_model=DeleteInvoiceResponseDTO)
async def delete_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Delete an invoice and all of its receipts."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
    )
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.post("/{invoice_id}/cancel", response_model=InvoiceResponseDTO)
async def cancel_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Cancel an invoice. Existing receipts are kept; new ones are rejected."""
    use_case = CancelInvoice(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.post("/{invoice_id}/mark-paid", response_model=MarkPaidResponseDTO)
async def mark_invoice_paid(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Mark an invoice as paid.

    Only succeeds when receipts already cover the total. Otherwise
    `requires_receipt` is true and `remaining_amount` is what the receipt
    should be for.
    """
    use_case = MarkInvoicePaid(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
    )
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.post("/{invoice_id}/sync", response_model=SyncResultDTO)
async def sync_invoice_payments(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Recalculate paid amount and status from the receipts."""
    use_case = SyncInvoicePayments(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
    )
    result = await use_case.execute(invoice_id, user_id=user_id)
    _raise_for(result)

    return result.value


@router.get("/{invoice_id}/balance", response_model=RemainingBalanceDTO)
async def get_remaining_balance(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Remaining balance of an invoice."""
    use_case = GetRemainingBalance(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session)
    )
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=ReminderResultDTO,
    responses={
        502: {
            "description": "Email could not be delivered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NOTIFICATION_FAILED",
                            "message": "Failed to send invoice #1001 to jane@client.test"
                        }
                    }
                }
            }
        }
    }
)
async def send_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    notifier: InvoiceNotifier = Depends(get_invoice_notifier),
):
    """Email the invoice to the client."""
    use_case = SendInvoiceReminder(SqlAlchemyInvoiceRepository(session), notifier)
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={200: {"content": {"application/pdf": {}}, "description": "PDF document"}},
)
async def download_invoice_pdf(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Download the invoice as a PDF."""
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
        pdf_service,
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(invoice_id, user_id)
    _raise_for(result)

    document = result.value
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )


@router.get("/{invoice_id}/receipts", response_model=ListReceiptsResponseDTO)
async def list_invoice_receipts(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Receipts recorded against an invoice, newest payment first."""
    use_case = ListReceipts(SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session))
    result = await use_case.execute(user_id, invoice_id=invoice_id)
    _raise_for(result)

    return result.value


@router.post(
    "/{invoice_id}/receipts",
    response_model=CreateReceiptResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Payment exceeds invoice total",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "OVERPAYMENT",
                            "message": "Payment exceeds invoice total. Attempted total: 1100.00, allowed: 1000.00",
                            "details": {"attempted_total": "1100.00", "allowed_total": "1000.00"}
                        }
                    }
                }
            }
        },
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice 5f8a... not found"
                        }
                    }
                }
            }
        }
    }
)
async def create_receipt(
    invoice_id: str,
    request: ReceiptRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    notifier: InvoiceNotifier = Depends(get_invoice_notifier),
):
    """
    Record a payment against an invoice.

    The invoice row is locked while the payment is applied, so concurrent
    payments cannot together exceed the invoice total.

    **Example request:**
    ```json
    {
      "amount": "400.00",
      "payment_method": "bank_transfer",
      "payment_date": "2026-10-19",
      "reference": "TX-991"
    }
    ```

    **Returns:**
    - 201: Receipt recorded; body has the updated invoice, the receipt and remaining amount
    - 400: Validation error or cancelled invoice
    - 404: Invoice not found
    - 409: Payment would exceed the invoice total
    """
    command = CreateReceiptCommandDTO(
        invoice_id=invoice_id,
        user_id=user_id,
        amount=request.amount,
        payment_method=request.payment_method,
        payment_date=request.payment_date,
        reference=request.reference,
        note=request.note,
    )

    use_case = CreateReceipt(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
        SqlAlchemyNumberSequenceRepository(session),
        notifier=notifier,
        receipt_number_prefix=ApplicationConfig.RECEIPT_NUMBER_PREFIX,
        receipt_number_start=ApplicationConfig.RECEIPT_NUMBER_START,
    )
    result = await use_case.execute(command)
    _raise_for(result)

    return result.value
