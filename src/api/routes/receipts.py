"""Receipt API Routes"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoicing import DeleteReceipt, GenerateReceiptPdf, GetReceipt, ListReceipts
from src.app.use_cases.invoicing.dtos import (
    DeleteReceiptResponseDTO,
    ListReceiptsResponseDTO,
    ReceiptResponseDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.receipt_repository import SqlAlchemyReceiptRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_pdf_service

router = APIRouter(prefix="/receipts", tags=["Receipts"])


@router.get("", response_model=ListReceiptsResponseDTO)
async def list_receipts(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """All receipts of the current user with invoice number and client."""
    use_case = ListReceipts(SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session))
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("/{receipt_id}", response_model=ReceiptResponseDTO)
async def get_receipt(
    receipt_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetReceipt(SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session))
    result = await use_case.execute(receipt_id, user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.delete("/{receipt_id}", response_model=DeleteReceiptResponseDTO)
async def delete_receipt(
    receipt_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Delete a receipt.

    The invoice's paid amount and status are recalculated from the
    remaining receipts in the same transaction.

    **Returns:**
    - 200: Receipt deleted; body has the updated invoice
    - 404: Receipt not found
    """
    use_case = DeleteReceipt(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
    )
    result = await use_case.execute(receipt_id, user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{receipt_id}/pdf",
    responses={200: {"content": {"application/pdf": {}}, "description": "PDF document"}},
)
async def download_receipt_pdf(
    receipt_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    use_case = GenerateReceiptPdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyReceiptRepository(session),
        pdf_service,
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(receipt_id, user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    document = result.value
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )
