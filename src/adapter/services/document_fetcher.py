"""HTTP Document Fetcher Implementation

Downloads source PDFs over HTTP(S) using httpx.
"""

import logging
import httpx
from config import ApplicationConfig
from src.app.services.document_fetcher import DocumentFetcher, DocumentFetchError

logger = logging.getLogger(__name__)


class HttpxDocumentFetcher(DocumentFetcher):
    """
    httpx implementation of DocumentFetcher

    One short-lived client per fetch; redirects are followed.
    """

    def __init__(self, timeout: float = ApplicationConfig.PDF_FETCH_TIMEOUT_SECONDS):
        """
        Initialize document fetcher

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout

    async def fetch(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch document from {url}: {e}")
            raise DocumentFetchError(f"Failed to fetch document from {url}: {e}") from e

        logger.info(f"Fetched document from {url} ({len(response.content)} bytes)")
        return response.content
