from .base import BaseModel, generate_uuid
from .style import Alignment, FontWeight, Margins, Orientation, PageSize, Rgb
from .template import ElementType, Template
from .template_record import TemplateRecord
from .invoice_document import InvoiceDocument, LineItem, Party
from .annotation import Annotation, AnnotationType

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Alignment",
    "FontWeight",
    "Margins",
    "Orientation",
    "PageSize",
    "Rgb",
    "ElementType",
    "Template",
    "TemplateRecord",
    "InvoiceDocument",
    "LineItem",
    "Party",
    "Annotation",
    "AnnotationType",
]
