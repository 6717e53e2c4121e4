"""Invoice Document Value Objects

Read-only invoice data handed to the PDF engine by the order/invoice data layer.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from pydantic import ConfigDict, Field, field_validator

from src.domain.style import CamelModel

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Quantize to 2 decimal places, half up"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class Party(CamelModel):
    """Company (supplier) or customer (recipient) details"""

    name: str = Field(..., description="Legal or trade name")
    address: Optional[str] = Field(default=None, description="Postal address, may span lines")
    gstin: Optional[str] = Field(default=None, description="GSTIN, free text")
    state: Optional[str] = Field(default=None, description="State used for place-of-supply comparison")
    phone: Optional[str] = None
    email: Optional[str] = None


class LineItem(CamelModel):
    """
    Line Item - One billable entry on an invoice

    Derived values are pure functions of the item:
    - amount = quantity * rate
    - tax_amount = round2(amount * tax_rate / 100)
    - total = amount + tax_amount
    """

    description: str = Field(..., description="Item description")
    hsn_code: Optional[str] = Field(default=None, description="HSN/SAC classification code")
    quantity: Decimal = Field(..., description="Quantity")
    rate: Decimal = Field(..., description="Price per unit")
    tax_rate: Decimal = Field(default=Decimal("0"), description="GST rate in percent")

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.rate

    @property
    def tax_amount(self) -> Decimal:
        return round2(self.amount * self.tax_rate / Decimal(100))

    @property
    def total(self) -> Decimal:
        return self.amount + self.tax_amount


class InvoiceDocument(CamelModel):
    """
    Invoice Document - Everything the engine renders for one invoice

    GSTINs, due date, notes and terms are optional and never block rendering.
    """

    invoice_number: str = Field(..., description="Invoice number (e.g., INV-2024-000123)")
    invoice_date: date = Field(..., alias="date", description="Invoice date")
    due_date: Optional[date] = Field(default=None, description="Payment due date")
    company: Party = Field(..., description="Supplier issuing the invoice")
    customer: Party = Field(..., description="Recipient of supply")
    items: List[LineItem] = Field(default_factory=list)
    notes: Optional[str] = None
    terms: Optional[str] = None

    @field_validator("invoice_date", "due_date", mode="before")
    @classmethod
    def _date_part(cls, value):
        # Upstream sends ISO timestamps as often as plain dates
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "invoiceNumber": "INV-2024-000123",
                "date": "2024-04-01",
                "dueDate": "2024-05-01",
                "company": {
                    "name": "Shree Textiles Pvt Ltd",
                    "address": "12 MG Road, Pune",
                    "gstin": "27AAACS1234A1Z5",
                    "state": "Maharashtra",
                },
                "customer": {
                    "name": "Acme Traders",
                    "address": "4 Brigade Road, Bengaluru",
                    "gstin": "29AABCA1234B1Z2",
                    "state": "Karnataka",
                },
                "items": [
                    {"description": "Cotton fabric", "hsnCode": "5208", "quantity": 2, "rate": 1000, "taxRate": 18},
                ],
            }
        }
    )
