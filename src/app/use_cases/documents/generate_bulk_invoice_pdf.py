"""GenerateBulkInvoicePdf Use Case

Renders several invoices with one template and merges them into a single PDF.
"""

import base64
from datetime import datetime
from src.app.result import Result, Return, Error
from src.app.repositories.template_repository import TemplateRepository
from src.app.services.pdf_service import PdfService
from .dtos import BulkInvoicePdfResponseDTO, GenerateBulkInvoicePdfCommandDTO
from .generate_invoice_pdf import load_template


class GenerateBulkInvoicePdf:
    """
    Use Case: Generate one merged PDF for many invoices

    Business Rules:
    1. At least one invoice is required
    2. All invoices share the template and render options
    3. Pages follow the order of the invoices in the command
    4. Any invoice failing to render fails the whole batch (no partial document)
    """

    def __init__(self, template_repo: TemplateRepository, pdf_service: PdfService):
        self.template_repo = template_repo
        self.pdf_service = pdf_service

    async def execute(self, command: GenerateBulkInvoicePdfCommandDTO) -> Result[BulkInvoicePdfResponseDTO]:
        if not command.invoices:
            return Return.err(
                Error(
                    code="NO_DOCUMENTS",
                    message="At least one invoice is required",
                    reason="Invoice list is empty",
                )
            )

        try:
            template_result = await load_template(
                self.template_repo, command.template, command.template_id
            )
            if template_result.is_err():
                return template_result

            documents = [
                self.pdf_service.generate_invoice(
                    invoice=invoice,
                    template=template_result.value,
                    options=command.options,
                )
                for invoice in command.invoices
            ]
            merged = self.pdf_service.merge_documents(documents)

            return Return.ok(
                BulkInvoicePdfResponseDTO(
                    invoice_numbers=[invoice.invoice_number for invoice in command.invoices],
                    pdf_base64=base64.b64encode(merged).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DOCUMENT_GENERATION_FAILED",
                    message=f"Failed to generate {len(command.invoices)} invoice(s)",
                    reason=str(e),
                )
            )
