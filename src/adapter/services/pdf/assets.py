"""Image asset resolution

All image payloads a template references are decoded up front, before any
drawing starts. Anything missing or unreadable is logged and left out; the
renderers then simply draw nothing for that image.
"""

import base64
import binascii
import logging
import re
from io import BytesIO
from typing import Dict, Optional
from reportlab.lib.utils import ImageReader

from src.app.services.pdf_service import RenderOptions
from src.domain.template import LOGO_REFERENCE, ImageElement, SignatureElement, Template

logger = logging.getLogger(__name__)

DATA_URL = re.compile(r"^data:image/(png|jpe?g);base64,", re.IGNORECASE)


def decode_data_url(payload: Optional[str]) -> Optional[bytes]:
    """
    Decode a ``data:image/png|jpeg;base64,...`` payload

    Returns:
        Raw image bytes, or None when the payload is not a PNG/JPEG data URL
    """
    if not payload:
        return None
    match = DATA_URL.match(payload)
    if not match:
        return None
    try:
        return base64.b64decode(payload[match.end():], validate=False)
    except (binascii.Error, ValueError):
        return None


def load_image(data: bytes) -> ImageReader:
    """Wrap raw PNG/JPEG bytes; raises if the bytes are not a readable image"""
    image = ImageReader(BytesIO(data))
    # ImageReader is lazy; force a decode so broken payloads fail here
    image.getSize()
    return image


def resolve_assets(template: Template, options: RenderOptions) -> Dict[str, ImageReader]:
    """
    Decode every image the template can draw

    Args:
        template: Template whose image and signature elements are scanned
        options: Render options carrying the named logo asset

    Returns:
        Mapping of element id to a ready-to-draw image
    """
    images = {}
    for element in template.elements:
        if not element.visible:
            continue
        if isinstance(element, ImageElement):
            data = _image_bytes(element, options)
        elif isinstance(element, SignatureElement):
            data = decode_data_url(element.signature_image)
            if data is None:
                continue
        else:
            continue

        if data is None:
            logger.warning(f"Image for element {element.id!r} is missing, skipping")
            continue
        try:
            images[element.id] = load_image(data)
        except Exception as e:
            logger.warning(f"Image for element {element.id!r} is unreadable, skipping: {e}")
    return images


def _image_bytes(element: ImageElement, options: RenderOptions) -> Optional[bytes]:
    if element.content == LOGO_REFERENCE:
        return options.logo_asset
    return decode_data_url(element.content)
