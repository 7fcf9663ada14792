"""Dashboard API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.app.use_cases.invoicing import GetDashboardSummary
from src.app.use_cases.invoicing.dtos import DashboardSummaryDTO
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.receipt_repository import SqlAlchemyReceiptRepository
from src.depends import get_session

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummaryDTO)
async def get_dashboard_summary(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Totals per currency for the current user.

    Invoiced, received and outstanding amounts are never summed across
    currencies.
    """
    use_case = GetDashboardSummary(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyReceiptRepository(session)
    )
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
