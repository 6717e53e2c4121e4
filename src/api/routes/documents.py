"""Document API Routes

FastAPI routes for invoice PDF generation, bulk download and annotation.
"""

import base64
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.result import Error
from src.app.services.pdf_service import PDF_CONTENT_TYPE
from src.app.use_cases.documents import (
    AnnotatePdf,
    AnnotatePdfCommandDTO,
    GenerateBulkInvoicePdf,
    GenerateBulkInvoicePdfCommandDTO,
    GenerateInvoicePdf,
    GenerateInvoicePdfCommandDTO,
    InvoicePdfResponseDTO,
)
from src.adapter.repositories.template_repository import SqlAlchemyTemplateRepository
from src.adapter.services.document_fetcher import HttpxDocumentFetcher
from src.adapter.services.pdf_service import ReportLabPdfService
from src.api.error import ClientError
from src.api.schemas.document_request import (
    AnnotateRequestSchema,
    BulkInvoiceRequestSchema,
    GenerateInvoiceRequestSchema,
)
from src.depends import get_session

router = APIRouter(prefix="/documents", tags=["Documents"])

ERROR_STATUS = {
    "TEMPLATE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_FETCH_FAILED": status.HTTP_502_BAD_GATEWAY,
    "DOCUMENT_GENERATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY,
}

ERROR_RESPONSES = {
    404: {
        "description": "Template not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "TEMPLATE_NOT_FOUND",
                        "message": "Template with ID tpl_123 not found"
                    }
                }
            }
        }
    },
    422: {
        "description": "Document could not be generated",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "DOCUMENT_GENERATION_FAILED",
                        "message": "Failed to generate invoice INV-2024-000123"
                    }
                }
            }
        }
    },
}


def raise_client_error(error: Error):
    raise ClientError(error, status_code=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


def pdf_response(pdf_base64: str, filename: str, disposition: str = "attachment") -> Response:
    return Response(
        content=base64.b64decode(pdf_base64),
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": f"{disposition}; filename={filename}"},
    )


async def _generate_invoice(request: GenerateInvoiceRequestSchema, session: AsyncSession):
    template_repo = SqlAlchemyTemplateRepository(session)
    pdf_service = ReportLabPdfService()

    use_case = GenerateInvoicePdf(template_repo, pdf_service)
    result = await use_case.execute(
        GenerateInvoicePdfCommandDTO(
            invoice=request.invoice,
            template=request.template,
            template_id=request.template_id,
            options=request.options.to_options(),
        )
    )

    if result.is_err():
        raise_client_error(result.error)
    return result.value


@router.post(
    "/invoice",
    response_model=InvoicePdfResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def generate_invoice(
    request: GenerateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Generate a GST invoice PDF.

    Renders the invoice with an inline template, a saved template
    (`template_id`) or the built-in layout when neither is given.

    **Returns:**
    - 200: PDF (base64) with subtotal, tax breakdown, grand total and amount in words
    - 404: Template not found
    - 422: Document could not be generated
    """
    return await _generate_invoice(request, session)


@router.post(
    "/invoice/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **ERROR_RESPONSES,
    }
)
async def download_invoice_pdf(
    request: GenerateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Download a GST invoice as a PDF file.

    Same input as `POST /documents/invoice`; returns the binary document.
    """
    response = await _generate_invoice(request, session)
    return pdf_response(response.pdf_base64, f"invoice_{response.invoice_number}.pdf")


@router.post(
    "/invoice/bulk/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "Merged PDF document"
        },
        **ERROR_RESPONSES,
    }
)
async def download_bulk_invoice_pdf(
    request: BulkInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Download several invoices merged into one PDF file.

    Every invoice is rendered with the same template and options; pages
    follow the order of `invoices`.
    """
    template_repo = SqlAlchemyTemplateRepository(session)
    pdf_service = ReportLabPdfService()

    use_case = GenerateBulkInvoicePdf(template_repo, pdf_service)
    result = await use_case.execute(
        GenerateBulkInvoicePdfCommandDTO(
            invoices=request.invoices,
            template=request.template,
            template_id=request.template_id,
            options=request.options.to_options(),
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return pdf_response(result.value.pdf_base64, "invoices.pdf")


@router.post(
    "/annotations",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "Annotated PDF document"
        },
        502: {"description": "Source document could not be fetched"},
        422: ERROR_RESPONSES[422],
    }
)
async def annotate_pdf(request: AnnotateRequestSchema):
    """
    Draw annotations over an existing PDF.

    The source is `pdf_base64` or `source_url`. Text, highlight and
    rectangle annotations are supported.

    **Returns:**
    - 200: Annotated PDF, inline
    - 400: No source document given
    - 422: Source is not a readable PDF
    - 502: Source URL could not be fetched
    """
    use_case = AnnotatePdf(HttpxDocumentFetcher(), ReportLabPdfService())
    result = await use_case.execute(
        AnnotatePdfCommandDTO(
            pdf_base64=request.pdf_base64,
            source_url=request.source_url,
            annotations=request.annotations,
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return pdf_response(result.value.pdf_base64, "annotated.pdf", disposition="inline")
