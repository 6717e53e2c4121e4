"""Drawing Surface

Renderers draw onto a ``Surface`` in top-left origin page points. The
ReportLab implementation flips every call into PDF space (bottom-left origin).
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from src.domain.style import Rgb


class Box(NamedTuple):
    """Axis-aligned area in top-left origin page points"""

    x: float
    y: float
    width: float
    height: float


class Surface(ABC):
    """Page-sized drawing target"""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Rgb,
                  alpha: Optional[float] = None) -> None:
        pass

    @abstractmethod
    def stroke_rect(self, x: float, y: float, width: float, height: float, color: Rgb,
                    line_width: float = 1, dash: Optional[Sequence[float]] = None) -> None:
        pass

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: Rgb,
                  thickness: float = 1) -> None:
        pass

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, font_name: str, size: float,
                  color: Rgb) -> None:
        """Draw a single line of text with its baseline at ``y``"""
        pass

    @abstractmethod
    def draw_image(self, image: ImageReader, x: float, y: float, width: float,
                   height: float) -> None:
        pass

    @abstractmethod
    def draw_rotated_text(self, text: str, center_x: float, center_y: float, font_name: str,
                          size: float, color: Rgb, angle: float, alpha: float) -> None:
        """Draw text centred on a point, rotated counter-clockwise by ``angle`` degrees"""
        pass


class ReportLabSurface(Surface):
    """Surface backed by a ReportLab canvas page"""

    def __init__(self, canvas: Canvas, width: float, height: float):
        super().__init__(width, height)
        self.canvas = canvas

    def _flip(self, y: float, height: float = 0) -> float:
        return self.height - y - height

    def fill_rect(self, x, y, width, height, color, alpha=None):
        self.canvas.saveState()
        self.canvas.setFillColorRGB(*color)
        if alpha is not None:
            self.canvas.setFillAlpha(alpha)
        self.canvas.rect(x, self._flip(y, height), width, height, stroke=0, fill=1)
        self.canvas.restoreState()

    def stroke_rect(self, x, y, width, height, color, line_width=1, dash=None):
        self.canvas.saveState()
        self.canvas.setStrokeColorRGB(*color)
        self.canvas.setLineWidth(line_width)
        if dash:
            self.canvas.setDash(list(dash))
        self.canvas.rect(x, self._flip(y, height), width, height, stroke=1, fill=0)
        self.canvas.restoreState()

    def draw_line(self, x1, y1, x2, y2, color, thickness=1):
        self.canvas.saveState()
        self.canvas.setStrokeColorRGB(*color)
        self.canvas.setLineWidth(thickness)
        self.canvas.line(x1, self._flip(y1), x2, self._flip(y2))
        self.canvas.restoreState()

    def draw_text(self, x, y, text, font_name, size, color):
        self.canvas.saveState()
        self.canvas.setFont(font_name, size)
        self.canvas.setFillColorRGB(*color)
        self.canvas.drawString(x, self._flip(y), text)
        self.canvas.restoreState()

    def draw_image(self, image, x, y, width, height):
        self.canvas.drawImage(image, x, self._flip(y, height), width=width, height=height, mask="auto")

    def draw_rotated_text(self, text, center_x, center_y, font_name, size, color, angle, alpha):
        self.canvas.saveState()
        self.canvas.setFont(font_name, size)
        self.canvas.setFillColorRGB(*color)
        self.canvas.setFillAlpha(alpha)
        self.canvas.translate(center_x, self._flip(center_y))
        self.canvas.rotate(angle)
        self.canvas.drawCentredString(0, 0, text)
        self.canvas.restoreState()
