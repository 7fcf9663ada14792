"""Number Sequence Domain Entity

Persistence-owned counters backing invoice and receipt numbers.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, String
from src.domain.base import BaseModel

INVOICE_NUMBER_SEQUENCE = "invoice_number"
RECEIPT_NUMBER_SEQUENCE = "receipt_number"


class NumberSequence(BaseModel, table=True):
    """
    Number Sequence - Monotonic counter per named sequence

    Domain Rules:
    - One row per sequence name
    - last_value is only ever incremented by an atomic UPDATE
    """

    __tablename__ = "number_sequences"

    name: str = Field(
        sa_column=Column(String(50), primary_key=True),
        description="Sequence name (invoice_number, receipt_number)"
    )

    last_value: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Last value handed out"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last allocation timestamp"
    )


def format_receipt_number(prefix: str, value: int) -> str:
    return f"{prefix}-{value:06d}"
