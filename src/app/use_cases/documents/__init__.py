"""Document generation use cases"""
from .generate_invoice_pdf import GenerateInvoicePdf
from .generate_bulk_invoice_pdf import GenerateBulkInvoicePdf
from .annotate_pdf import AnnotatePdf
from .dtos import (
    GenerateInvoicePdfCommandDTO,
    InvoicePdfResponseDTO,
    GenerateBulkInvoicePdfCommandDTO,
    BulkInvoicePdfResponseDTO,
    AnnotatePdfCommandDTO,
    AnnotatedPdfResponseDTO,
)

__all__ = [
    "GenerateInvoicePdf",
    "GenerateBulkInvoicePdf",
    "AnnotatePdf",
    "GenerateInvoicePdfCommandDTO",
    "InvoicePdfResponseDTO",
    "GenerateBulkInvoicePdfCommandDTO",
    "BulkInvoicePdfResponseDTO",
    "AnnotatePdfCommandDTO",
    "AnnotatedPdfResponseDTO",
]
