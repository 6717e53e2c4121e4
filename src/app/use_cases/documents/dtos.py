"""Data Transfer Objects for Document Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.app.services.pdf_service import PDF_CONTENT_TYPE, RenderOptions
from src.domain.annotation import Annotation
from src.domain.invoice_document import InvoiceDocument
from src.domain.template import Template


class GenerateInvoicePdfCommandDTO(BaseModel):
    """
    Command DTO for rendering one invoice

    Used as input to GenerateInvoicePdf use case. An inline template wins
    over a template id; with neither, the built-in layout is used.
    """

    invoice: InvoiceDocument = Field(
        ...,
        description="Invoice data to render"
    )

    template: Optional[Template] = Field(
        default=None,
        description="Inline template (as produced by the designer)"
    )

    template_id: Optional[str] = Field(
        default=None,
        description="ID of a saved template"
    )

    options: RenderOptions = Field(
        default_factory=RenderOptions,
        description="Logo asset and optional extras"
    )


class InvoicePdfResponseDTO(BaseModel):
    """
    Response DTO for a rendered invoice

    Carries the document and the figures printed on it.
    """

    invoice_number: str = Field(..., description="Invoice number")
    content_type: str = Field(default=PDF_CONTENT_TYPE, description="MIME type of the document")
    pdf_base64: str = Field(..., description="Base64-encoded PDF")
    subtotal: Decimal = Field(..., description="Sum of line amounts")
    total_tax: Decimal = Field(..., description="Sum of line taxes")
    cgst: Decimal = Field(..., description="Central GST (intra-state)")
    sgst: Decimal = Field(..., description="State GST (intra-state)")
    igst: Decimal = Field(..., description="Integrated GST (inter-state)")
    grand_total: Decimal = Field(..., description="Subtotal plus total tax")
    amount_in_words: str = Field(..., description="Grand total in Indian rupee words")
    generated_at: datetime = Field(..., description="Generation timestamp (UTC)")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_number": "INV-2024-000123",
                "content_type": "application/pdf",
                "pdf_base64": "JVBERi0xLjQK...",
                "subtotal": "4000.00",
                "total_tax": "720.00",
                "cgst": "360.00",
                "sgst": "360.00",
                "igst": "0.00",
                "grand_total": "4720.00",
                "amount_in_words": "Four Thousand Seven Hundred Twenty Rupees Only",
                "generated_at": "2024-04-01T10:00:00Z",
            }
        }


class GenerateBulkInvoicePdfCommandDTO(BaseModel):
    """
    Command DTO for rendering several invoices into one document

    Every invoice uses the same template and options.
    """

    invoices: List[InvoiceDocument] = Field(
        ...,
        description="Invoices in output order"
    )

    template: Optional[Template] = Field(default=None, description="Inline template")
    template_id: Optional[str] = Field(default=None, description="ID of a saved template")
    options: RenderOptions = Field(default_factory=RenderOptions)


class BulkInvoicePdfResponseDTO(BaseModel):
    """Response DTO for a merged bulk document"""

    invoice_numbers: List[str] = Field(..., description="Invoices included, in page order")
    content_type: str = Field(default=PDF_CONTENT_TYPE)
    pdf_base64: str = Field(..., description="Base64-encoded merged PDF")
    generated_at: datetime = Field(...)


class AnnotatePdfCommandDTO(BaseModel):
    """
    Command DTO for annotating an existing PDF

    The source is either inline base64 bytes or a URL to fetch.
    """

    pdf_base64: Optional[str] = Field(
        default=None,
        description="Source PDF, base64-encoded"
    )

    source_url: Optional[str] = Field(
        default=None,
        description="URL of the source PDF"
    )

    annotations: List[Annotation] = Field(
        default_factory=list,
        description="Marks to draw"
    )


class AnnotatedPdfResponseDTO(BaseModel):
    """Response DTO for an annotated PDF"""

    content_type: str = Field(default=PDF_CONTENT_TYPE)
    pdf_base64: str = Field(..., description="Base64-encoded annotated PDF")
    annotation_count: int = Field(..., description="Annotations requested")
    generated_at: datetime = Field(...)
