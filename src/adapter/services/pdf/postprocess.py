"""PDF post-processing

Operations on finished PDF bytes: the digital-signature form field, the
annotation overlay and merging. Unreadable input is fatal here; it raises
DocumentGenerationError and nothing is returned.
"""

import logging
from collections import defaultdict
from io import BytesIO
from typing import Dict, List, Sequence

from PyPDF2 import PdfMerger, PdfReader, PdfWriter
from PyPDF2.generic import (
    ArrayObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)
from reportlab.pdfgen.canvas import Canvas

from src.adapter.services.pdf.fonts import FontLookup
from src.adapter.services.pdf.renderers import render_annotation
from src.adapter.services.pdf.surface import Box, ReportLabSurface
from src.app.services.pdf_service import DocumentGenerationError
from src.domain.annotation import Annotation

logger = logging.getLogger(__name__)

SIGNATURE_FIELD_NAME = "signature"

# SignaturesExist | AppendOnly
SIG_FLAGS = 3


def open_pdf(pdf_bytes: bytes) -> PdfReader:
    """Parse PDF bytes; raises DocumentGenerationError when they are not a readable PDF"""
    if not pdf_bytes:
        raise DocumentGenerationError("Source document is empty")
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        # Page tree is parsed lazily; touch it so corrupt documents fail here
        len(reader.pages)
    except Exception as e:
        raise DocumentGenerationError(f"Source document is not a readable PDF: {e}") from e
    return reader


def _write(writer: PdfWriter) -> bytes:
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def add_signature_field(pdf_bytes: bytes, area: Box, page_height: float) -> bytes:
    """
    Add an empty digital-signature form field over an area of the first page

    Args:
        pdf_bytes: Rendered document
        area: Signature area in top-left origin page points
        page_height: Height of the first page, for the flip into PDF space

    Returns:
        Document with an AcroForm ``/Sig`` field named ``signature``
    """
    reader = open_pdf(pdf_bytes)
    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    metadata = reader.metadata or {}
    writer.add_metadata({key: str(metadata[key]) for key in metadata})

    page_ref = writer._root_object["/Pages"]["/Kids"][0]
    page = page_ref.get_object()
    bottom = page_height - area.y - area.height
    field = DictionaryObject({
        NameObject("/Type"): NameObject("/Annot"),
        NameObject("/Subtype"): NameObject("/Widget"),
        NameObject("/FT"): NameObject("/Sig"),
        NameObject("/T"): TextStringObject(SIGNATURE_FIELD_NAME),
        NameObject("/F"): NumberObject(4),
        NameObject("/Rect"): ArrayObject([
            FloatObject(area.x),
            FloatObject(bottom),
            FloatObject(area.x + area.width),
            FloatObject(bottom + area.height),
        ]),
        NameObject("/P"): page_ref,
    })
    field_ref = writer._add_object(field)

    if "/Annots" in page:
        page[NameObject("/Annots")].append(field_ref)
    else:
        page[NameObject("/Annots")] = ArrayObject([field_ref])

    writer._root_object[NameObject("/AcroForm")] = DictionaryObject({
        NameObject("/Fields"): ArrayObject([field_ref]),
        NameObject("/SigFlags"): NumberObject(SIG_FLAGS),
    })
    return _write(writer)


def overlay_annotations(pdf_bytes: bytes, annotations: Sequence[Annotation], fonts: FontLookup) -> bytes:
    """
    Draw annotations on top of existing pages

    Each annotated page gets a one-page ReportLab overlay merged onto it.
    Annotations for pages the document does not have are skipped.
    """
    reader = open_pdf(pdf_bytes)
    page_count = len(reader.pages)

    by_page: Dict[int, List[Annotation]] = defaultdict(list)
    for annotation in annotations:
        if annotation.page_index >= page_count:
            logger.warning(
                f"Annotation targets page {annotation.page_index} "
                f"but document has {page_count} page(s), skipping"
            )
            continue
        by_page[annotation.page_index].append(annotation)

    writer = PdfWriter()
    for index, page in enumerate(reader.pages):
        if index in by_page:
            overlay = _overlay_page(
                float(page.mediabox.width), float(page.mediabox.height), by_page[index], fonts
            )
            page.merge_page(overlay)
        writer.add_page(page)
    return _write(writer)


def _overlay_page(width: float, height: float, annotations: Sequence[Annotation], fonts: FontLookup):
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=(width, height))
    surface = ReportLabSurface(canvas, width, height)
    for annotation in annotations:
        render_annotation(annotation, surface, fonts)
    canvas.showPage()
    canvas.save()
    return PdfReader(BytesIO(buffer.getvalue())).pages[0]


def merge(documents: Sequence[bytes]) -> bytes:
    """Concatenate documents in order into a single PDF"""
    merger = PdfMerger()
    try:
        for pdf_bytes in documents:
            merger.append(open_pdf(pdf_bytes))
        buffer = BytesIO()
        merger.write(buffer)
        return buffer.getvalue()
    finally:
        merger.close()
