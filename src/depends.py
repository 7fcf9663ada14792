from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.services.invoice_notifier import InvoiceNotifier
from src.app.services.pdf_service import PdfService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_invoice_notifier() -> InvoiceNotifier:
    return InvoiceNotifier(
        create_notification_service(ApplicationConfig),
        base_url=ApplicationConfig.APP_BASE_URL,
    )


def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


async def init_db():
    """Create missing tables (development and SQLite deployments)"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
