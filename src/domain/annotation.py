"""Annotation Value Objects

Marks drawn over an existing PDF (reviewer notes, highlights, boxes).
"""

from enum import Enum
from typing import Optional
from pydantic import Field

from src.domain.style import CamelModel


class AnnotationType(str, Enum):
    """Annotation kinds"""
    TEXT = "text"
    HIGHLIGHT = "highlight"
    RECTANGLE = "rectangle"


class Annotation(CamelModel):
    """
    Annotation - One mark on one page

    Coordinates use the same top-left origin as template elements.
    Highlights default to translucent yellow, rectangles to a blue outline.
    """

    type: AnnotationType = Field(..., description="Annotation kind")
    page_index: int = Field(default=0, ge=0, description="Zero-based page index")
    x: float = Field(default=0)
    y: float = Field(default=0)
    width: float = Field(default=0)
    height: float = Field(default=0)
    content: Optional[str] = Field(default=None, description="Text for text annotations")
    font_size: float = Field(default=12)
    color: Optional[str] = Field(default=None, description="Hex color; kind default when omitted")
    opacity: float = Field(default=0.3, ge=0, le=1, description="Highlight fill opacity")
