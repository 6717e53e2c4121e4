from .pdf_service import PdfService, RenderOptions, DocumentGenerationError
from .document_fetcher import DocumentFetcher, DocumentFetchError

__all__ = [
    "PdfService",
    "RenderOptions",
    "DocumentGenerationError",
    "DocumentFetcher",
    "DocumentFetchError",
]
