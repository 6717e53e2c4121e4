"""PDF Generation Service Interface

Defines the contract for rendering invoices and post-processing PDFs.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from src.domain.annotation import Annotation
from src.domain.invoice_document import InvoiceDocument
from src.domain.tax import InvoiceFigures
from src.domain.template import Template

PDF_CONTENT_TYPE = "application/pdf"


class DocumentGenerationError(Exception):
    """A document could not be produced; no partial output exists"""


class RenderOptions(BaseModel):
    """Per-call switches for invoice rendering"""

    model_config = ConfigDict(frozen=True)

    logo_asset: Optional[bytes] = Field(
        default=None,
        description="PNG/JPEG bytes drawn wherever a template image references 'logo'"
    )
    enable_qr_placeholder: bool = Field(
        default=False,
        description="Draw a QR code placeholder box at the bottom-left of the page"
    )
    enable_signature_field: bool = Field(
        default=False,
        description="Add a digital signature form field over the signature area"
    )
    watermark_text: Optional[str] = Field(
        default=None,
        description="Translucent diagonal stamp (e.g. PROFORMA, DRAFT)"
    )


class PdfService(ABC):
    """
    Service interface for PDF generation

    Rendering never fails on incomplete data (missing images, unknown fonts,
    unresolved placeholders); it raises DocumentGenerationError only when no
    document can be produced at all.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: InvoiceDocument,
        template: Optional[Template] = None,
        options: Optional[RenderOptions] = None,
        figures: Optional[InvoiceFigures] = None,
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice data to render
            template: Layout to use; the built-in default layout when None
            options: Logo asset and optional extras
            figures: Totals, tax breakdown and words already computed for this
                invoice; computed here when None

        Returns:
            PDF document as bytes

        Raises:
            DocumentGenerationError: The document could not be generated
        """
        pass

    @abstractmethod
    def add_annotations(self, pdf_bytes: bytes, annotations: List[Annotation]) -> bytes:
        """
        Draw annotations over an existing PDF

        Args:
            pdf_bytes: Source document
            annotations: Marks to draw, each targeting one page

        Returns:
            Annotated PDF document as bytes

        Raises:
            DocumentGenerationError: Source bytes are not a readable PDF
        """
        pass

    @abstractmethod
    def merge_documents(self, documents: List[bytes]) -> bytes:
        """
        Concatenate PDFs into one document

        Args:
            documents: PDF documents in output order

        Returns:
            Merged PDF document as bytes

        Raises:
            DocumentGenerationError: Any input is not a readable PDF
        """
        pass
