"""Document Fetcher Interface

Defines the contract for retrieving source PDFs from storage or the web.
"""

from abc import ABC, abstractmethod


class DocumentFetchError(Exception):
    """Source document could not be retrieved"""


class DocumentFetcher(ABC):
    """
    Service interface for fetching documents

    Fetches complete before any rendering starts.
    """

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """
        Download a document

        Args:
            url: Document location

        Returns:
            Raw document bytes

        Raises:
            DocumentFetchError: Document could not be downloaded
        """
        pass
