import pytest
from io import BytesIO
from PIL import Image

from src.adapter.services.pdf.fonts import FontLookup
from src.adapter.services.pdf.surface import Surface
from src.domain.invoice_document import InvoiceDocument


class RecordingSurface(Surface):
    """Surface that records draw calls instead of drawing"""

    def __init__(self, width: float = 595.28, height: float = 841.89):
        super().__init__(width, height)
        self.calls = []

    def fill_rect(self, x, y, width, height, color, alpha=None):
        self.calls.append(("fill_rect", dict(x=x, y=y, width=width, height=height, color=color, alpha=alpha)))

    def stroke_rect(self, x, y, width, height, color, line_width=1, dash=None):
        self.calls.append((
            "stroke_rect",
            dict(x=x, y=y, width=width, height=height, color=color, line_width=line_width, dash=dash),
        ))

    def draw_line(self, x1, y1, x2, y2, color, thickness=1):
        self.calls.append(("draw_line", dict(x1=x1, y1=y1, x2=x2, y2=y2, color=color, thickness=thickness)))

    def draw_text(self, x, y, text, font_name, size, color):
        self.calls.append(("draw_text", dict(x=x, y=y, text=text, font_name=font_name, size=size, color=color)))

    def draw_image(self, image, x, y, width, height):
        self.calls.append(("draw_image", dict(image=image, x=x, y=y, width=width, height=height)))

    def draw_rotated_text(self, text, center_x, center_y, font_name, size, color, angle, alpha):
        self.calls.append((
            "draw_rotated_text",
            dict(text=text, center_x=center_x, center_y=center_y, font_name=font_name,
                 size=size, color=color, angle=angle, alpha=alpha),
        ))

    def of(self, operation: str):
        return [args for name, args in self.calls if name == operation]

    @property
    def texts(self):
        return [args["text"] for args in self.of("draw_text")]

    def text_call(self, text: str):
        return next(args for args in self.of("draw_text") if args["text"] == text)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def fonts():
    return FontLookup()


@pytest.fixture
def png_bytes():
    """A small valid PNG"""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def invoice():
    """Intra-state invoice: two items worth 2000 each at 18%"""
    return InvoiceDocument.model_validate({
        "invoiceNumber": "INV-2024-000123",
        "date": "2024-04-01",
        "dueDate": "2024-05-01",
        "company": {
            "name": "Shree Textiles",
            "address": "12 MG Road, Pune",
            "gstin": "27AAACS1234A1Z5",
            "state": "Maharashtra",
        },
        "customer": {
            "name": "Acme Traders",
            "address": "4 FC Road, Pune",
            "gstin": "27AABCA1234B1Z2",
            "state": "Maharashtra",
        },
        "items": [
            {"description": "Cotton fabric", "hsnCode": "5208", "quantity": 2, "rate": 1000, "taxRate": 18},
            {"description": "Silk fabric", "hsnCode": "5007", "quantity": 1, "rate": 2000, "taxRate": 18},
        ],
    })
