"""GenerateInvoicePdf Use Case

Renders a GST invoice PDF from invoice data and a template.
"""

import base64
import logging
from datetime import datetime
from typing import Optional
from src.app.result import Result, Return, Error
from src.app.repositories.template_repository import TemplateRepository
from src.app.services.pdf_service import DocumentGenerationError, PdfService
from src.domain.invoice_document import round2
from src.domain.tax import compute_figures
from src.domain.template import Template
from .dtos import GenerateInvoicePdfCommandDTO, InvoicePdfResponseDTO

logger = logging.getLogger(__name__)


def template_not_found(template_id: str) -> Error:
    return Error(
        code="TEMPLATE_NOT_FOUND",
        message=f"Template with ID {template_id} not found",
        reason="Template does not exist",
    )


async def load_template(
    template_repo: TemplateRepository,
    template: Optional[Template],
    template_id: Optional[str],
) -> Result[Optional[Template]]:
    """
    Pick the template for a render

    Returns:
        The inline template, else the saved one, else None (built-in layout);
        an error when a template id is given but not found
    """
    if template is not None:
        return Return.ok(template)
    if not template_id:
        return Return.ok(None)

    saved = await template_repo.get(template_id)
    if saved is None:
        return Return.err(template_not_found(template_id))
    return Return.ok(saved)


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. An inline template takes precedence over a template id
    2. A template id that does not exist is an error
    3. No template at all renders the built-in layout
    4. Incomplete invoice data never fails the render (placeholders stay, images are skipped)
    5. Returns the PDF as base64 with the figures printed on it

    Flow:
    1. Resolve the template
    2. Compute totals, tax breakdown and words once
    3. Render the PDF with those figures
    4. Return response with PDF as base64
    """

    def __init__(self, template_repo: TemplateRepository, pdf_service: PdfService):
        self.template_repo = template_repo
        self.pdf_service = pdf_service

    async def execute(self, command: GenerateInvoicePdfCommandDTO) -> Result[InvoicePdfResponseDTO]:
        """
        Execute invoice PDF generation

        Args:
            command: Invoice, template (inline or by id) and render options

        Returns:
            Result[InvoicePdfResponseDTO]: Success with PDF or error
        """
        invoice = command.invoice
        try:
            # Step 1: Resolve template
            template_result = await load_template(
                self.template_repo, command.template, command.template_id
            )
            if template_result.is_err():
                return template_result

            # Step 2: Figures
            figures = compute_figures(invoice)
            totals, breakdown = figures.totals, figures.breakdown

            # Step 3: Render
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                template=template_result.value,
                options=command.options,
                figures=figures,
            )

            # Step 4: Build response
            response = InvoicePdfResponseDTO(
                invoice_number=invoice.invoice_number,
                pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                subtotal=round2(totals.subtotal),
                total_tax=round2(totals.total_tax),
                cgst=round2(breakdown.cgst),
                sgst=round2(breakdown.sgst),
                igst=round2(breakdown.igst),
                grand_total=round2(totals.grand_total),
                amount_in_words=f"{figures.amount_in_words} Only",
                generated_at=datetime.utcnow(),
            )

            return Return.ok(response)

        except DocumentGenerationError as e:
            return Return.err(
                Error(
                    code="DOCUMENT_GENERATION_FAILED",
                    message=f"Failed to generate invoice {invoice.invoice_number}",
                    reason=str(e),
                )
            )
        except Exception as e:
            logger.error(f"Unexpected error generating invoice {invoice.invoice_number}: {e}")
            return Return.err(
                Error(
                    code="DOCUMENT_GENERATION_FAILED",
                    message=f"Failed to generate invoice {invoice.invoice_number}",
                    reason=str(e),
                )
            )
