"""Request schemas for Document API

Pydantic models for validating incoming HTTP requests. Invoice and template
bodies keep the designer's camelCase keys; the envelope is snake_case.
"""

import base64
import binascii
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.services.pdf_service import RenderOptions
from src.domain.annotation import Annotation
from src.domain.invoice_document import InvoiceDocument
from src.domain.template import Template


class RenderOptionsSchema(BaseModel):
    """
    Render options as sent over HTTP

    The logo travels as base64 (plain or a ``data:image/...;base64,`` URL).
    """

    logo_base64: Optional[str] = Field(
        default=None,
        description="Logo image for template elements referencing 'logo'"
    )

    enable_qr_placeholder: bool = Field(default=False)
    enable_signature_field: bool = Field(default=False)
    watermark_text: Optional[str] = Field(default=None, max_length=40)

    @field_validator('logo_base64')
    @classmethod
    def validate_logo(cls, v):
        """Ensure the logo is decodable base64"""
        if v is None:
            return v
        payload = v.split(",", 1)[1] if v.startswith("data:") else v
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("logo_base64 must be base64-encoded image data")
        return payload

    def to_options(self) -> RenderOptions:
        return RenderOptions(
            logo_asset=base64.b64decode(self.logo_base64) if self.logo_base64 else None,
            enable_qr_placeholder=self.enable_qr_placeholder,
            enable_signature_field=self.enable_signature_field,
            watermark_text=self.watermark_text,
        )


class GenerateInvoiceRequestSchema(BaseModel):
    """
    Request schema for rendering an invoice

    Used for POST /documents/invoice and /documents/invoice/pdf.
    """

    invoice: InvoiceDocument = Field(..., description="Invoice data")
    template: Optional[Template] = Field(default=None, description="Inline template")
    template_id: Optional[str] = Field(default=None, description="Saved template ID")
    options: RenderOptionsSchema = Field(default_factory=RenderOptionsSchema)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice": {
                    "invoiceNumber": "INV-2024-000123",
                    "date": "2024-04-01",
                    "company": {"name": "Shree Textiles Pvt Ltd", "state": "Maharashtra"},
                    "customer": {"name": "Acme Traders", "state": "Karnataka"},
                    "items": [
                        {"description": "Cotton fabric", "hsnCode": "5208", "quantity": 2, "rate": 1000, "taxRate": 18}
                    ],
                },
                "options": {"enable_signature_field": True},
            }
        }


class BulkInvoiceRequestSchema(BaseModel):
    """
    Request schema for rendering several invoices into one PDF

    Used for POST /documents/invoice/bulk/pdf endpoint.
    """

    invoices: List[InvoiceDocument] = Field(..., min_length=1, description="Invoices in page order")
    template: Optional[Template] = Field(default=None)
    template_id: Optional[str] = Field(default=None)
    options: RenderOptionsSchema = Field(default_factory=RenderOptionsSchema)


class AnnotateRequestSchema(BaseModel):
    """
    Request schema for annotating a PDF

    Used for POST /documents/annotations endpoint. Exactly one source is expected.
    """

    pdf_base64: Optional[str] = Field(default=None, description="Source PDF, base64-encoded")
    source_url: Optional[str] = Field(default=None, description="URL of the source PDF")
    annotations: List[Annotation] = Field(default_factory=list)
