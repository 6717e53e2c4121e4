"""AnnotatePdf Use Case

Draws annotations over an existing PDF supplied inline or by URL.
"""

import base64
import binascii
from datetime import datetime
from src.app.result import Result, Return, Error
from src.app.services.document_fetcher import DocumentFetcher, DocumentFetchError
from src.app.services.pdf_service import DocumentGenerationError, PdfService
from .dtos import AnnotatePdfCommandDTO, AnnotatedPdfResponseDTO


class AnnotatePdf:
    """
    Use Case: Annotate an existing PDF

    Business Rules:
    1. Source is inline base64 bytes, or fetched from source_url
    2. A source that is not a readable PDF fails the whole operation
    3. Annotations for pages the document lacks are skipped

    Flow:
    1. Obtain source bytes (decode or fetch)
    2. Overlay annotations
    3. Return response with PDF as base64
    """

    def __init__(self, document_fetcher: DocumentFetcher, pdf_service: PdfService):
        self.document_fetcher = document_fetcher
        self.pdf_service = pdf_service

    async def execute(self, command: AnnotatePdfCommandDTO) -> Result[AnnotatedPdfResponseDTO]:
        """
        Execute annotation

        Args:
            command: Source document and annotations

        Returns:
            Result[AnnotatedPdfResponseDTO]: Success with PDF or error
        """
        # Step 1: Source bytes
        if command.pdf_base64:
            try:
                source = base64.b64decode(command.pdf_base64, validate=True)
            except (binascii.Error, ValueError) as e:
                return Return.err(
                    Error(
                        code="DOCUMENT_GENERATION_FAILED",
                        message="Source document is not valid base64",
                        reason=str(e),
                    )
                )
        elif command.source_url:
            try:
                source = await self.document_fetcher.fetch(command.source_url)
            except DocumentFetchError as e:
                return Return.err(
                    Error(
                        code="DOCUMENT_FETCH_FAILED",
                        message=f"Could not fetch {command.source_url}",
                        reason=str(e),
                    )
                )
        else:
            return Return.err(
                Error(
                    code="NO_DOCUMENTS",
                    message="Either pdf_base64 or source_url is required",
                    reason="No source document given",
                )
            )

        # Step 2: Overlay
        try:
            annotated = self.pdf_service.add_annotations(source, command.annotations)
        except DocumentGenerationError as e:
            return Return.err(
                Error(
                    code="DOCUMENT_GENERATION_FAILED",
                    message="Failed to annotate document",
                    reason=str(e),
                )
            )

        # Step 3: Build response
        return Return.ok(
            AnnotatedPdfResponseDTO(
                pdf_base64=base64.b64encode(annotated).decode("utf-8"),
                annotation_count=len(command.annotations),
                generated_at=datetime.utcnow(),
            )
        )
