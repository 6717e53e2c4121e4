"""ReportLab PDF Generation Service Implementation

Implements template-driven invoice rendering using the ReportLab canvas,
and post-processing (annotations, merge) using PyPDF2.
"""

import logging
from io import BytesIO
from typing import Iterable, List, Optional, Sequence

from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen.canvas import Canvas

from config import ApplicationConfig
from src.adapter.services.pdf import postprocess
from src.adapter.services.pdf.assets import resolve_assets
from src.adapter.services.pdf.default_template import build_default_template
from src.adapter.services.pdf.fonts import FontLookup
from src.adapter.services.pdf.formatting import format_money
from src.adapter.services.pdf.renderers import (
    RenderContext,
    render_element,
    render_items_table,
    render_signature,
)
from src.adapter.services.pdf.surface import Box, ReportLabSurface, Surface
from src.adapter.services.pdf.variables import build_context
from src.app.services.pdf_service import DocumentGenerationError, PdfService, RenderOptions
from src.domain.annotation import Annotation
from src.domain.invoice_document import InvoiceDocument
from src.domain.style import BLACK, WHITE, Rgb
from src.domain.tax import InvoiceFigures, TaxBreakdown, Totals, compute_figures
from src.domain.template import ElementType, SignatureElement, TableElement, Template

logger = logging.getLogger(__name__)

TOTALS_ANCHOR_ID = "total-section"
SIGNATURE_AREA_ID = "signature-area"

# Default table origin when the template has no table element
DEFAULT_TABLE_Y = 280

SUMMARY_WIDTH = 200
SUMMARY_LINE = 15
GRAND_TOTAL_HEIGHT = 25
GRAND_TOTAL_FILL = Rgb.gray(0.1)

SIGNATURE_BOX_WIDTH = 150
SIGNATURE_BOX_HEIGHT = 50

QR_SIZE = 80
QR_FILL = Rgb.gray(0.9)
QR_BORDER = Rgb.gray(0.5)

WATERMARK_COLOR = Rgb.gray(0.5)
WATERMARK_ALPHA = 0.15
WATERMARK_FONT_SIZE = 72
WATERMARK_ANGLE = 45

MUTED = Rgb.gray(0.3)


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    One configurable engine for both layouts: a supplied template, or the
    built-in default template equivalent to the fixed invoice layout.

    Flow (per invoice):
    1. Create a page sized from the template's page size and orientation
    2. Fill the background unless it is white
    3. Use the invoice figures (totals, tax breakdown, words) computed once
    4. Draw visible elements in template order
    5. Draw the items table, tax summary, grand total, amount in words,
       terms, signature block and optional extras
    6. Serialize and add the signature form field if requested
    """

    def __init__(
        self,
        currency_prefix: str = ApplicationConfig.PDF_CURRENCY_PREFIX,
        default_terms: Optional[Sequence[str]] = None,
        creator: str = ApplicationConfig.PDF_CREATOR,
        fonts: Optional[FontLookup] = None,
    ):
        self.currency_prefix = currency_prefix
        self.default_terms = list(default_terms if default_terms is not None else ApplicationConfig.PDF_DEFAULT_TERMS)
        self.creator = creator
        self.fonts = fonts or FontLookup()

    def generate_invoice(
        self,
        invoice: InvoiceDocument,
        template: Optional[Template] = None,
        options: Optional[RenderOptions] = None,
        figures: Optional[InvoiceFigures] = None,
    ) -> bytes:
        template = template or build_default_template()
        options = options or RenderOptions()
        width, height = template.dimensions

        try:
            figures = figures or compute_figures(invoice)

            buffer = BytesIO()
            canvas = Canvas(buffer, pagesize=(width, height))
            self._set_metadata(canvas, invoice)

            surface = ReportLabSurface(canvas, width, height)
            signature_area = self.render_invoice(surface, template, invoice, options, figures)

            canvas.showPage()
            canvas.save()
            pdf_bytes = buffer.getvalue()

            if options.enable_signature_field:
                pdf_bytes = postprocess.add_signature_field(pdf_bytes, signature_area, height)
        except Exception as e:
            logger.error(f"Failed to generate invoice {invoice.invoice_number}: {e}")
            if isinstance(e, DocumentGenerationError):
                raise
            raise DocumentGenerationError(f"Failed to generate invoice {invoice.invoice_number}: {e}") from e

        logger.info(
            f"Generated invoice {invoice.invoice_number} "
            f"(template={template.id or 'inline'}, {len(pdf_bytes)} bytes)"
        )
        return pdf_bytes

    def render_invoice(
        self,
        surface: Surface,
        template: Template,
        invoice: InvoiceDocument,
        options: RenderOptions,
        figures: Optional[InvoiceFigures] = None,
    ) -> Box:
        """
        Draw one invoice page onto a surface

        Args:
            surface: Drawing target sized to the template page
            template: Layout to draw
            invoice: Invoice data
            options: Logo asset and optional extras
            figures: Precomputed totals, breakdown and words; computed when None

        Returns:
            The signature area, used to place the signature form field
        """
        background = Rgb.from_hex(template.background_color)
        if not background.is_white():
            surface.fill_rect(0, 0, surface.width, surface.height, background)

        figures = figures or compute_figures(invoice)
        variables = build_context(
            invoice, figures.totals, figures.breakdown, figures.amount_in_words, self.default_terms
        )

        ctx = RenderContext(
            surface=surface,
            fonts=self.fonts,
            variables=variables,
            images=resolve_assets(template, options),
        )

        # Element pass; template order is the z-order
        for element in template.elements:
            render_element(element, ctx)

        cursor = self._draw_table(template, invoice, ctx)
        cursor = self._draw_summary(template, figures.totals, figures.breakdown, cursor, ctx)
        cursor = self._draw_amount_in_words(template, figures.amount_in_words, cursor, ctx)
        cursor = self._draw_terms(template, invoice, cursor, ctx)

        signature_element = template.find_visible(ElementType.SIGNATURE)
        if signature_element is not None:
            signature_area = Box(
                signature_element.x, signature_element.y,
                signature_element.width, signature_element.height,
            )
        else:
            signature_area = self._draw_signature_block(template, invoice, cursor, ctx)

        if options.enable_qr_placeholder:
            self._draw_qr_placeholder(template, ctx)
        if options.watermark_text:
            surface.draw_rotated_text(
                options.watermark_text, surface.width / 2, surface.height / 2,
                self.fonts.bold, WATERMARK_FONT_SIZE, WATERMARK_COLOR,
                WATERMARK_ANGLE, WATERMARK_ALPHA,
            )
        return signature_area

    def _set_metadata(self, canvas: Canvas, invoice: InvoiceDocument) -> None:
        canvas.setTitle(f"{invoice.invoice_number} - {invoice.company.name}")
        canvas.setAuthor(invoice.company.name)
        canvas.setSubject("GST Compliant Invoice")
        canvas.setCreator(self.creator)

    def _draw_table(self, template: Template, invoice: InvoiceDocument, ctx: RenderContext) -> float:
        """Items table at the table element, or at the default position without one"""
        table = next((e for e in template.elements if isinstance(e, TableElement)), None)
        if table is None:
            margins = template.margins
            width = ctx.surface.width - margins.left - margins.right
            return render_items_table(margins.left, DEFAULT_TABLE_Y, width, invoice.items, ctx)
        if not table.visible:
            return table.y + table.height
        return render_items_table(table.x, table.y, table.width, invoice.items, ctx)

    def _draw_summary(
        self,
        template: Template,
        totals: Totals,
        breakdown: TaxBreakdown,
        cursor: float,
        ctx: RenderContext,
    ) -> float:
        """
        Tax summary and grand total box

        Anchored at the ``total-section`` element when the template has one,
        hidden or not, otherwise right-aligned below the table.
        """
        surface = ctx.surface
        anchor = template.find_by_id(TOTALS_ANCHOR_ID)
        if anchor is not None:
            x, y = anchor.x, anchor.y
        else:
            x = surface.width - template.margins.right - SUMMARY_WIDTH
            y = cursor + 30

        rows = [("Subtotal:", totals.subtotal)]
        rows += [(f"{name}:", amount) for name, amount in breakdown.as_dict().items() if amount]
        rows.append(("Total Tax:", totals.total_tax))

        surface.draw_text(x, y, "Tax Summary:", ctx.fonts.bold, 10, BLACK)
        y += SUMMARY_LINE + 3
        for label, amount in rows:
            self._draw_label_value(x, y, label, format_money(amount, self.currency_prefix),
                                   ctx.fonts.regular, 10, BLACK, ctx)
            y += SUMMARY_LINE

        y += 5
        surface.fill_rect(x, y, SUMMARY_WIDTH, GRAND_TOTAL_HEIGHT, GRAND_TOTAL_FILL)
        self._draw_label_value(x + 10, y + 17, "Grand Total:",
                               format_money(totals.grand_total, self.currency_prefix),
                               ctx.fonts.bold, 12, WHITE, ctx, width=SUMMARY_WIDTH - 20)
        return y + GRAND_TOTAL_HEIGHT

    def _draw_label_value(self, x, y, label, value, font_name, size, color, ctx, width=SUMMARY_WIDTH):
        ctx.surface.draw_text(x, y, label, font_name, size, color)
        value_width = ctx.fonts.text_width(value, font_name, size)
        ctx.surface.draw_text(x + width - value_width, y, value, font_name, size, color)

    def _draw_amount_in_words(self, template: Template, amount_in_words: str, cursor: float,
                              ctx: RenderContext) -> float:
        margins = template.margins
        width = ctx.surface.width - margins.left - margins.right
        y = cursor + 30
        ctx.surface.draw_text(margins.left, y, "Amount in Words:", ctx.fonts.bold, 10, BLACK)
        for line in simpleSplit(f"{amount_in_words} Only", ctx.fonts.regular, 10, width):
            y += 14
            ctx.surface.draw_text(margins.left, y, line, ctx.fonts.regular, 10, BLACK)
        return y

    def _draw_terms(self, template: Template, invoice: InvoiceDocument, cursor: float,
                    ctx: RenderContext) -> float:
        """Terms and conditions block, then notes when present"""
        margins = template.margins
        width = ctx.surface.width - margins.left - margins.right
        terms = invoice.terms.splitlines() if invoice.terms else self.default_terms

        y = self._draw_block(margins.left, cursor + 25, width, "Terms & Conditions:", terms, ctx)
        if invoice.notes:
            y = self._draw_block(margins.left, y + 20, width, "Notes:", invoice.notes.splitlines(), ctx)
        return y

    def _draw_block(self, x: float, y: float, width: float, heading: str, lines: Iterable[str],
                    ctx: RenderContext) -> float:
        ctx.surface.draw_text(x, y, heading, ctx.fonts.bold, 10, BLACK)
        for line in lines:
            for wrapped in simpleSplit(line, ctx.fonts.regular, 9, width):
                y += 12
                ctx.surface.draw_text(x, y, wrapped, ctx.fonts.regular, 9, MUTED)
        return y

    def _draw_signature_block(self, template: Template, invoice: InvoiceDocument, cursor: float,
                              ctx: RenderContext) -> Box:
        """'For <company>' with a signature box at the bottom right"""
        surface = ctx.surface
        x = surface.width - template.margins.right - SIGNATURE_BOX_WIDTH
        lowest = surface.height - template.margins.bottom - SIGNATURE_BOX_HEIGHT - 25
        y = max(cursor + 30, lowest)

        surface.draw_text(x, y, f"For {invoice.company.name}", ctx.fonts.bold, 10, BLACK)
        box = SignatureElement(
            id=SIGNATURE_AREA_ID, x=x, y=y + 10,
            width=SIGNATURE_BOX_WIDTH, height=SIGNATURE_BOX_HEIGHT,
        )
        render_signature(box, ctx)
        return Box(box.x, box.y, box.width, box.height)

    def _draw_qr_placeholder(self, template: Template, ctx: RenderContext) -> None:
        surface = ctx.surface
        x = template.margins.left
        y = surface.height - template.margins.bottom - QR_SIZE
        surface.fill_rect(x, y, QR_SIZE, QR_SIZE, QR_FILL)
        surface.stroke_rect(x, y, QR_SIZE, QR_SIZE, QR_BORDER)
        label = "QR Code"
        label_width = self.fonts.text_width(label, self.fonts.regular, 8)
        surface.draw_text(x + (QR_SIZE - label_width) / 2, y + QR_SIZE / 2 + 3, label,
                          self.fonts.regular, 8, MUTED)

    def add_annotations(self, pdf_bytes: bytes, annotations: List[Annotation]) -> bytes:
        try:
            result = postprocess.overlay_annotations(pdf_bytes, annotations, self.fonts)
        except DocumentGenerationError as e:
            logger.error(f"Failed to add annotations: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to add annotations: {e}")
            raise DocumentGenerationError(f"Failed to add annotations: {e}") from e

        logger.info(f"Added {len(annotations)} annotation(s), {len(result)} bytes")
        return result

    def merge_documents(self, documents: List[bytes]) -> bytes:
        if not documents:
            raise DocumentGenerationError("No documents to merge")
        try:
            result = postprocess.merge(documents)
        except DocumentGenerationError as e:
            logger.error(f"Failed to merge documents: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to merge documents: {e}")
            raise DocumentGenerationError(f"Failed to merge documents: {e}") from e

        logger.info(f"Merged {len(documents)} document(s), {len(result)} bytes")
        return result
