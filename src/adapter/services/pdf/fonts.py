"""Font lookup over the PDF standard fonts

Designer font families map onto the built-in Type-1 faces; anything unknown
renders in Helvetica. The mapping is read-only and safe to share between calls.
"""

import logging
from types import MappingProxyType
from typing import Optional
from reportlab.pdfbase.pdfmetrics import stringWidth

from src.domain.style import FontWeight

logger = logging.getLogger(__name__)

DEFAULT_FAMILY = "Arial"

# family -> (regular, bold)
FONT_FAMILIES = MappingProxyType({
    "Arial": ("Helvetica", "Helvetica-Bold"),
    "Helvetica": ("Helvetica", "Helvetica-Bold"),
    "Times New Roman": ("Times-Roman", "Times-Bold"),
    "Times": ("Times-Roman", "Times-Bold"),
    "Courier New": ("Courier", "Courier-Bold"),
    "Courier": ("Courier", "Courier-Bold"),
})


class FontLookup:
    """Resolves family/weight to a standard font name and measures text"""

    def font_name(self, family: Optional[str], weight: FontWeight = FontWeight.NORMAL) -> str:
        faces = FONT_FAMILIES.get(family or DEFAULT_FAMILY)
        if faces is None:
            logger.debug(f"Unknown font family {family!r}, using {DEFAULT_FAMILY}")
            faces = FONT_FAMILIES[DEFAULT_FAMILY]
        regular, bold = faces
        return bold if weight == FontWeight.BOLD else regular

    @property
    def regular(self) -> str:
        return self.font_name(DEFAULT_FAMILY)

    @property
    def bold(self) -> str:
        return self.font_name(DEFAULT_FAMILY, FontWeight.BOLD)

    def text_width(self, text: str, font_name: str, size: float) -> float:
        return stringWidth(text, font_name, size)
