from .pdf_service import ReportLabPdfService
from .document_fetcher import HttpxDocumentFetcher

__all__ = [
    "ReportLabPdfService",
    "HttpxDocumentFetcher",
]
