"""Request schemas for Receipt API"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class ReceiptRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /invoices/{invoice_id}/receipts endpoint.
    """

    amount: Decimal = Field(
        ..., gt=0, decimal_places=2, description="Amount paid (must be > 0, at most two decimals)"
    )
    payment_method: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Payment method (e.g., bank_transfer, mobile_money, cash)"
    )
    payment_date: Optional[date] = Field(
        default=None,
        description="Day the payment was made (defaults to today)"
    )
    reference: Optional[str] = Field(default=None, max_length=255)
    note: Optional[str] = Field(default=None, max_length=2000)

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "400.00",
                "payment_method": "bank_transfer",
                "payment_date": "2026-10-19",
                "reference": "TX-991",
            }
        }
