"""Geometry and Style Primitives

Page sizes, orientation, margins, colors and font attributes shared by
every template element. Coordinates are page points with a top-left origin,
the same unit and origin the template designer works in.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models exchanged with the template designer (camelCase JSON)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PageSize(str, Enum):
    """Supported page sizes"""
    A4 = "A4"
    LETTER = "Letter"
    A5 = "A5"
    LEGAL = "Legal"


# Portrait (width, height) in points
PAGE_DIMENSIONS = {
    PageSize.A4: (595.28, 841.89),
    PageSize.LETTER: (612.0, 792.0),
    PageSize.A5: (419.53, 595.28),
    PageSize.LEGAL: (612.0, 1008.0),
}


class Orientation(str, Enum):
    """Page orientation"""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class Alignment(str, Enum):
    """Horizontal text alignment inside an element box"""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FontWeight(str, Enum):
    """Font weight"""
    NORMAL = "normal"
    BOLD = "bold"


class Margins(CamelModel):
    """Page margins in points"""

    top: float = Field(default=50, description="Top margin")
    right: float = Field(default=50, description="Right margin")
    bottom: float = Field(default=50, description="Bottom margin")
    left: float = Field(default=50, description="Left margin")


def page_dimensions(page_size: PageSize, orientation: Orientation) -> Tuple[float, float]:
    """
    Resolve page (width, height) in points

    Landscape swaps the portrait width and height.
    """
    width, height = PAGE_DIMENSIONS.get(page_size, PAGE_DIMENSIONS[PageSize.A4])
    if orientation == Orientation.LANDSCAPE:
        return height, width
    return width, height


_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


class Rgb(NamedTuple):
    """RGB color with 0..1 channels"""

    red: float
    green: float
    blue: float

    @classmethod
    def from_hex(cls, value: Optional[str]) -> "Rgb":
        """Parse #rrggbb; anything unparseable is black"""
        match = _HEX_PATTERN.match(value or "")
        if not match:
            return BLACK
        return cls(*(int(part, 16) / 255 for part in match.groups()))

    @classmethod
    def gray(cls, level: float) -> "Rgb":
        return cls(level, level, level)

    def is_white(self) -> bool:
        return self == WHITE


BLACK = Rgb(0.0, 0.0, 0.0)
WHITE = Rgb(1.0, 1.0, 1.0)
