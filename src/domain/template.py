"""Invoice Template Value Objects

A template is the positioned-element layout produced by the invoice designer.
It is immutable input to a single render call.
"""

import logging
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union
from pydantic import Field, field_validator

from src.domain.style import (
    Alignment,
    CamelModel,
    FontWeight,
    Margins,
    Orientation,
    PageSize,
    page_dimensions,
)

logger = logging.getLogger(__name__)


class ElementType(str, Enum):
    """Element kinds a template can hold"""
    TEXT = "text"
    RECTANGLE = "rectangle"
    LINE = "line"
    IMAGE = "image"
    TABLE = "table"
    SIGNATURE = "signature"


# Named image reference resolved from RenderOptions.logo_asset
LOGO_REFERENCE = "logo"


class ElementBase(CamelModel):
    """Fields shared by every element kind"""

    id: str = Field(..., description="Stable element identifier")
    x: float = Field(default=0, description="Left edge, page points")
    y: float = Field(default=0, description="Top edge (text: first baseline), page points")
    width: float = Field(default=0, description="Box width, page points")
    height: float = Field(default=0, description="Box height, page points")
    visible: bool = Field(default=True, description="Hidden elements are never drawn")
    locked: bool = Field(default=False, description="Designer-only flag")


class TextElement(ElementBase):
    type: Literal["text"] = "text"
    content: str = ""
    font_family: str = "Arial"
    font_size: float = 12
    font_weight: FontWeight = FontWeight.NORMAL
    color: Optional[str] = None
    alignment: Alignment = Alignment.LEFT


class RectangleElement(ElementBase):
    type: Literal["rectangle"] = "rectangle"
    background_color: Optional[str] = None
    border_color: Optional[str] = None
    border_width: float = 0


class LineElement(ElementBase):
    """Horizontal rule; ``height`` is the stroke thickness"""

    type: Literal["line"] = "line"
    color: Optional[str] = None


class ImageElement(ElementBase):
    """Inline ``data:image/...;base64,`` payload or a named reference such as ``logo``"""

    type: Literal["image"] = "image"
    content: Optional[str] = None


class SignatureElement(ElementBase):
    type: Literal["signature"] = "signature"
    content: Optional[str] = None
    signature_image: Optional[str] = None
    font_size: float = 10


class TableElement(ElementBase):
    """Placeholder for the computed items table; content comes from line items"""

    type: Literal["table"] = "table"


Element = Annotated[
    Union[
        TextElement,
        RectangleElement,
        LineElement,
        ImageElement,
        SignatureElement,
        TableElement,
    ],
    Field(discriminator="type"),
]

_KNOWN_TYPES = {kind.value for kind in ElementType}


class Template(CamelModel):
    """
    Template - Ordered element list plus page settings

    Rules:
    - elements are drawn in list order (later elements paint over earlier ones)
    - unknown page size falls back to A4, unknown orientation to portrait
    - the designer's legacy "logo" element becomes an image referencing the logo asset
    """

    id: Optional[str] = Field(default=None, description="Template identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    elements: List[Element] = Field(default_factory=list)
    page_size: PageSize = Field(default=PageSize.A4)
    orientation: Orientation = Field(default=Orientation.PORTRAIT)
    margins: Margins = Field(default_factory=Margins)
    background_color: str = Field(default="#ffffff")

    @field_validator("page_size", mode="before")
    @classmethod
    def _fallback_page_size(cls, value: Any) -> Any:
        if value is None or value in {size.value for size in PageSize} or isinstance(value, PageSize):
            return value or PageSize.A4
        logger.warning(f"Unknown page size {value!r}, falling back to A4")
        return PageSize.A4

    @field_validator("orientation", mode="before")
    @classmethod
    def _fallback_orientation(cls, value: Any) -> Any:
        if value is None:
            return Orientation.PORTRAIT
        if isinstance(value, Orientation) or value in {o.value for o in Orientation}:
            return value
        logger.warning(f"Unknown orientation {value!r}, falling back to portrait")
        return Orientation.PORTRAIT

    @field_validator("background_color", mode="before")
    @classmethod
    def _default_background(cls, value: Any) -> Any:
        return value or "#ffffff"

    @field_validator("elements", mode="before")
    @classmethod
    def _normalise_elements(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        elements = []
        for raw in value:
            if not isinstance(raw, dict):
                elements.append(raw)
                continue
            kind = raw.get("type")
            if kind == "logo":
                raw = {**raw, "type": ElementType.IMAGE.value, "content": raw.get("content") or LOGO_REFERENCE}
            elif kind not in _KNOWN_TYPES:
                logger.warning(f"Skipping element {raw.get('id')!r} with unknown type {kind!r}")
                continue
            elements.append(raw)
        return elements

    @property
    def dimensions(self) -> Tuple[float, float]:
        """Page (width, height) after orientation"""
        return page_dimensions(self.page_size, self.orientation)

    def find_visible(self, element_type: ElementType) -> Optional[ElementBase]:
        """First visible element of the given kind, if any"""
        for element in self.elements:
            if element.type == element_type.value and element.visible:
                return element
        return None

    def find_by_id(self, element_id: str) -> Optional[ElementBase]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None
