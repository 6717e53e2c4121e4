"""Built-in invoice layout

Used whenever no template is supplied. Element ids match the ones the
template designer starts a new template with, so the assembler's anchors
(``items-table``, ``total-section``, ``signature-area``) behave the same.
"""

from src.domain.template import (
    LineElement,
    RectangleElement,
    TableElement,
    Template,
    TextElement,
)
from src.domain.style import Alignment, FontWeight

DEFAULT_TEMPLATE_ID = "default"

_CONTENT_LEFT = 50
_CONTENT_WIDTH = 495


def build_default_template() -> Template:
    """A4 portrait: company header, TAX INVOICE title block, Bill To box, items table"""
    return Template(
        id=DEFAULT_TEMPLATE_ID,
        name="Standard GST Invoice",
        elements=[
            TextElement(
                id="company-name", x=_CONTENT_LEFT, y=60, width=280, height=30,
                content="{company.name}", font_size=24, font_weight=FontWeight.BOLD,
            ),
            TextElement(
                id="company-address", x=_CONTENT_LEFT, y=85, width=280, height=45,
                content="{company.address}\nGSTIN: {company.gstin}\nPhone: {company.phone}",
                font_size=10, color="#555555",
            ),
            TextElement(
                id="invoice-title", x=345, y=60, width=200, height=30,
                content="TAX INVOICE", font_size=20, font_weight=FontWeight.BOLD,
                color="#cc0000", alignment=Alignment.RIGHT,
            ),
            TextElement(
                id="invoice-number", x=345, y=85, width=200, height=15,
                content="Invoice No: {invoiceNumber}", font_size=10, alignment=Alignment.RIGHT,
            ),
            TextElement(
                id="invoice-date", x=345, y=100, width=200, height=15,
                content="Date: {invoiceDate}", font_size=10, alignment=Alignment.RIGHT,
            ),
            TextElement(
                id="due-date", x=345, y=115, width=200, height=15,
                content="Due Date: {dueDate}", font_size=10, alignment=Alignment.RIGHT,
            ),
            LineElement(
                id="header-rule", x=_CONTENT_LEFT, y=145, width=_CONTENT_WIDTH, height=1,
                color="#cccccc",
            ),
            RectangleElement(
                id="customer-info", x=_CONTENT_LEFT, y=160, width=_CONTENT_WIDTH, height=85,
                background_color="#f5f5f5", border_color="#cccccc", border_width=1,
            ),
            TextElement(
                id="bill-to-label", x=60, y=178, width=200, height=15,
                content="Bill To:", font_size=12, font_weight=FontWeight.BOLD,
            ),
            TextElement(
                id="customer-details", x=60, y=196, width=470, height=45,
                content="{customer.name}\n{customer.address}\nGSTIN: {customer.gstin}",
                font_size=10,
            ),
            TableElement(
                id="items-table", x=_CONTENT_LEFT, y=265, width=_CONTENT_WIDTH, height=25,
            ),
        ],
    )
