from .fonts import FontLookup
from .surface import Box, ReportLabSurface, Surface
from .default_template import build_default_template

__all__ = [
    "FontLookup",
    "Box",
    "ReportLabSurface",
    "Surface",
    "build_default_template",
]
