"""Element Renderers

One renderer per template element kind. Every renderer draws onto a
``Surface`` using top-left origin page points and never raises for
incomplete data: missing images draw nothing, unknown fonts fall back.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Sequence, Type

from reportlab.lib.utils import ImageReader

from src.adapter.services.pdf.fonts import FontLookup
from src.adapter.services.pdf.formatting import format_amount, format_number
from src.adapter.services.pdf.surface import Surface
from src.adapter.services.pdf.variables import resolve
from src.domain.annotation import Annotation, AnnotationType
from src.domain.invoice_document import LineItem
from src.domain.style import BLACK, WHITE, Alignment, Rgb
from src.domain.template import (
    ElementBase,
    ImageElement,
    LineElement,
    RectangleElement,
    SignatureElement,
    TableElement,
    TextElement,
)

logger = logging.getLogger(__name__)

LINE_HEIGHT = 1.2

SIGNATURE_LABEL = "Authorized Signatory"
SIGNATURE_BORDER = Rgb.gray(0.8)
SIGNATURE_LABEL_COLOR = Rgb.gray(0.5)
SIGNATURE_DASH = (3, 3)
SIGNATURE_INSET = 5
SIGNATURE_LABEL_SPACE = 20

TABLE_HEADERS = (
    "S.No", "Description", "HSN/SAC", "Qty", "Rate",
    "Amount", "Tax Rate", "Tax Amount", "Total",
)
TABLE_COLUMN_WIDTHS = (40, 120, 60, 40, 60, 70, 60, 70, 70)
TABLE_HEADER_HEIGHT = 25
TABLE_ROW_HEIGHT = 20
TABLE_HEADER_FILL = Rgb.gray(0.2)
TABLE_ZEBRA_FILL = Rgb.gray(0.95)
TABLE_BORDER = Rgb.gray(0.5)
TABLE_HEADER_FONT_SIZE = 9
TABLE_ROW_FONT_SIZE = 8
CELL_PADDING = 5

HIGHLIGHT_COLOR = Rgb(1.0, 1.0, 0.0)
ANNOTATION_OUTLINE_COLOR = Rgb(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class RenderContext:
    """Everything a renderer needs for one render call"""

    surface: Surface
    fonts: FontLookup
    variables: Mapping = field(default_factory=dict)
    images: Mapping[str, ImageReader] = field(default_factory=dict)


def aligned_x(x: float, width: float, text_width: float, alignment: Alignment) -> float:
    if alignment == Alignment.CENTER:
        return x + (width - text_width) / 2
    if alignment == Alignment.RIGHT:
        return x + width - text_width
    return x


def render_text(element: TextElement, ctx: RenderContext) -> None:
    """
    Draw resolved text, one baseline per line

    Lines are spaced at font size x 1.2 going down the page; each line is
    aligned inside the element box by its measured width.
    """
    text = resolve(element.content, ctx.variables)
    font_name = ctx.fonts.font_name(element.font_family, element.font_weight)
    color = Rgb.from_hex(element.color)
    line_height = element.font_size * LINE_HEIGHT

    for index, line in enumerate(text.split("\n")):
        if not line:
            continue
        text_width = ctx.fonts.text_width(line, font_name, element.font_size)
        x = aligned_x(element.x, element.width, text_width, element.alignment)
        ctx.surface.draw_text(x, element.y + index * line_height, line, font_name, element.font_size, color)


def render_rectangle(element: RectangleElement, ctx: RenderContext) -> None:
    # Fill and border are independent; a bordered box gets both
    if element.background_color:
        ctx.surface.fill_rect(
            element.x, element.y, element.width, element.height,
            Rgb.from_hex(element.background_color),
        )
    if element.border_width > 0:
        ctx.surface.stroke_rect(
            element.x, element.y, element.width, element.height,
            Rgb.from_hex(element.border_color), line_width=element.border_width,
        )


def render_line(element: LineElement, ctx: RenderContext) -> None:
    """Horizontal stroke; the element's height is the stroke thickness"""
    thickness = element.height or 1
    ctx.surface.draw_line(
        element.x, element.y, element.x + element.width, element.y,
        Rgb.from_hex(element.color), thickness=thickness,
    )


def render_image(element: ImageElement, ctx: RenderContext) -> None:
    image = ctx.images.get(element.id)
    if image is None:
        return
    ctx.surface.draw_image(image, element.x, element.y, element.width, element.height)


def render_signature(element: SignatureElement, ctx: RenderContext) -> None:
    """Dashed placeholder box, label near the bottom, optional signature image inset"""
    ctx.surface.stroke_rect(
        element.x, element.y, element.width, element.height,
        SIGNATURE_BORDER, dash=SIGNATURE_DASH,
    )
    label = resolve(element.content or SIGNATURE_LABEL, ctx.variables)
    ctx.surface.draw_text(
        element.x + 10, element.y + element.height - SIGNATURE_INSET, label,
        ctx.fonts.regular, element.font_size, SIGNATURE_LABEL_COLOR,
    )

    image = ctx.images.get(element.id)
    if image is not None:
        ctx.surface.draw_image(
            image,
            element.x + SIGNATURE_INSET,
            element.y + SIGNATURE_INSET,
            element.width - 2 * SIGNATURE_INSET,
            element.height - SIGNATURE_LABEL_SPACE,
        )


def column_widths(width: float) -> Sequence[float]:
    """
    Fixed item table column widths

    The fixed widths are used as-is unless the table box is narrower than
    their sum, in which case they shrink proportionally to fit.
    """
    natural = sum(TABLE_COLUMN_WIDTHS)
    if not width or width >= natural:
        return TABLE_COLUMN_WIDTHS
    scale = width / natural
    return tuple(w * scale for w in TABLE_COLUMN_WIDTHS)


def item_cells(index: int, item: LineItem) -> Sequence[str]:
    """Row cells for one item; amounts come from the item's derived values"""
    return (
        str(index + 1),
        item.description,
        item.hsn_code or "",
        format_number(item.quantity),
        format_amount(item.rate),
        format_amount(item.amount),
        f"{format_number(item.tax_rate)}%",
        format_amount(item.tax_amount),
        format_amount(item.total),
    )


def render_items_table(x: float, y: float, width: float, items: Sequence[LineItem], ctx: RenderContext) -> float:
    """
    Draw the computed items table

    Args:
        x: Left edge of the table
        y: Top edge of the header row
        width: Table box width (0 uses the natural column total)
        items: Invoice line items, one row each
        ctx: Render context

    Returns:
        Y coordinate of the table's bottom edge
    """
    widths = column_widths(width)
    table_width = sum(widths)
    # Text shrinks with the columns
    scale = table_width / sum(TABLE_COLUMN_WIDTHS)
    header_size = TABLE_HEADER_FONT_SIZE * scale
    row_size = TABLE_ROW_FONT_SIZE * scale
    surface = ctx.surface

    surface.fill_rect(x, y, table_width, TABLE_HEADER_HEIGHT, TABLE_HEADER_FILL)
    _draw_row(x, y + 16, widths, TABLE_HEADERS, ctx.fonts.bold, header_size, WHITE, ctx)

    row_y = y + TABLE_HEADER_HEIGHT
    for index, item in enumerate(items):
        if index % 2 == 0:
            surface.fill_rect(x, row_y, table_width, TABLE_ROW_HEIGHT, TABLE_ZEBRA_FILL)
        _draw_row(x, row_y + 13, widths, item_cells(index, item), ctx.fonts.regular, row_size, BLACK, ctx)
        row_y += TABLE_ROW_HEIGHT

    surface.stroke_rect(x, y, table_width, row_y - y, TABLE_BORDER)
    return row_y


def _draw_row(x, baseline, widths, cells, font_name, size, color, ctx: RenderContext) -> None:
    cell_x = x
    for cell, width in zip(cells, widths):
        text = _fit(cell, width - 2 * CELL_PADDING, font_name, size, ctx.fonts)
        if text:
            ctx.surface.draw_text(cell_x + CELL_PADDING, baseline, text, font_name, size, color)
        cell_x += width


def _fit(text: str, max_width: float, font_name: str, size: float, fonts: FontLookup) -> str:
    """Truncate text with an ellipsis so it stays inside its cell"""
    if fonts.text_width(text, font_name, size) <= max_width:
        return text
    while text and fonts.text_width(text + "...", font_name, size) > max_width:
        text = text[:-1]
    return text + "..." if text else ""


def render_table(element: TableElement, ctx: RenderContext) -> None:
    # The table is drawn by the assembler from line items, never from the element
    pass


RENDERERS: Dict[Type[ElementBase], Callable[[ElementBase, RenderContext], None]] = {
    TextElement: render_text,
    RectangleElement: render_rectangle,
    LineElement: render_line,
    ImageElement: render_image,
    SignatureElement: render_signature,
    TableElement: render_table,
}


def render_element(element: ElementBase, ctx: RenderContext) -> None:
    """Dispatch a visible element to its renderer; hidden elements draw nothing"""
    if not element.visible:
        return
    renderer = RENDERERS.get(type(element))
    if renderer is None:
        logger.warning(f"No renderer for element {element.id!r} ({type(element).__name__})")
        return
    renderer(element, ctx)


def render_annotation(annotation: Annotation, surface: Surface, fonts: FontLookup) -> None:
    """Draw one annotation; text uses y as its baseline"""
    if annotation.type == AnnotationType.TEXT:
        if annotation.content:
            color = Rgb.from_hex(annotation.color)
            surface.draw_text(annotation.x, annotation.y, annotation.content, fonts.regular, annotation.font_size, color)
    elif annotation.type == AnnotationType.HIGHLIGHT:
        color = Rgb.from_hex(annotation.color) if annotation.color else HIGHLIGHT_COLOR
        surface.fill_rect(annotation.x, annotation.y, annotation.width, annotation.height, color, alpha=annotation.opacity)
    elif annotation.type == AnnotationType.RECTANGLE:
        color = Rgb.from_hex(annotation.color) if annotation.color else ANNOTATION_OUTLINE_COLOR
        surface.stroke_rect(annotation.x, annotation.y, annotation.width, annotation.height, color)
