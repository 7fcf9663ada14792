"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_validator
from src.domain.invoice import Currency


class InvoiceRequestSchema(BaseModel):
    """
    Request schema for creating or replacing an invoice

    Used for POST /invoices and PUT /invoices/{invoice_id}.
    """

    invoice_name: str = Field(..., min_length=1, max_length=255)
    total: Decimal = Field(..., gt=0, decimal_places=2, description="Invoiced amount (must be > 0)")
    currency: Currency = Field(default=Currency.UGX)
    allow_overpayment: bool = Field(default=False)

    from_name: str = Field(..., min_length=1, max_length=255)
    from_email: str = Field(..., min_length=3, max_length=255)
    from_address: str = Field(..., min_length=1, max_length=500)

    client_name: str = Field(..., min_length=1, max_length=255)
    client_email: str = Field(..., min_length=3, max_length=255)
    client_address: str = Field(..., min_length=1, max_length=500)

    invoice_item_description: str = Field(..., min_length=1, max_length=500)
    invoice_item_quantity: int = Field(default=1, ge=1)
    invoice_item_rate: Decimal = Field(..., ge=0, decimal_places=2)

    issue_date: date = Field(..., description="Invoice date (YYYY-MM-DD)")
    due_date: int = Field(default=0, ge=0, description="Net days after issue_date")
    note: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("from_email", "client_email")
    @classmethod
    def validate_email(cls, v):
        """Light email check; delivery is the real test"""
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Invalid email address")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_name": "Website redesign",
                "total": "1000.00",
                "currency": "USD",
                "from_name": "Acme Studio",
                "from_email": "billing@acme.test",
                "from_address": "Plot 1, Kampala Road",
                "client_name": "Jane Client",
                "client_email": "jane@client.test",
                "client_address": "Plot 9, Jinja Road",
                "invoice_item_description": "Design work",
                "invoice_item_quantity": 1,
                "invoice_item_rate": "1000.00",
                "issue_date": "2026-10-19",
                "due_date": 30,
            }
        }


class CreateInvoiceRequestSchema(InvoiceRequestSchema):
    """Used for POST /invoices. Invoices start as draft or pending."""

    status: Literal["draft", "pending"] = Field(default="pending")
