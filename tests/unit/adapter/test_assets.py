"""Unit tests for image asset resolution"""

import base64
import logging

from src.adapter.services.pdf.assets import decode_data_url, resolve_assets
from src.app.services.pdf_service import RenderOptions
from src.domain.template import Template


def data_url(data: bytes, mime: str = "png") -> str:
    return f"data:image/{mime};base64,{base64.b64encode(data).decode()}"


class TestDecodeDataUrl:
    """Test data URL decoding"""

    def test_png_and_jpeg_prefixes(self):
        assert decode_data_url(data_url(b"abc")) == b"abc"
        assert decode_data_url(data_url(b"abc", "jpeg")) == b"abc"
        assert decode_data_url(data_url(b"abc", "jpg")) == b"abc"

    def test_other_payloads_are_ignored(self):
        assert decode_data_url(None) is None
        assert decode_data_url("") is None
        assert decode_data_url("https://example.com/logo.png") is None
        assert decode_data_url(data_url(b"abc", "gif")) is None


class TestResolveAssets:
    """Test up-front image decoding"""

    def test_inline_and_logo_images_are_decoded(self, png_bytes):
        """
        Given: An inline PNG element and a logo reference
        When: Assets are resolved with a logo asset
        Then: Both elements get a drawable image
        """
        # Arrange
        template = Template.model_validate({
            "elements": [
                {"id": "stamp", "type": "image", "content": data_url(png_bytes)},
                {"id": "brand", "type": "logo"},
            ]
        })

        # Act
        images = resolve_assets(template, RenderOptions(logo_asset=png_bytes))

        # Assert
        assert set(images) == {"stamp", "brand"}
        assert images["stamp"].getSize() == (4, 4)

    def test_missing_logo_is_skipped_with_warning(self, caplog):
        # Arrange
        template = Template.model_validate({"elements": [{"id": "brand", "type": "logo"}]})

        # Act
        with caplog.at_level(logging.WARNING):
            images = resolve_assets(template, RenderOptions())

        # Assert
        assert images == {}
        assert "brand" in caplog.text

    def test_unreadable_image_is_skipped(self):
        """Test bytes that are not an image do not fail resolution"""
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "stamp", "type": "image", "content": data_url(b"not an image")}]
        })

        # Act
        images = resolve_assets(template, RenderOptions())

        # Assert
        assert images == {}

    def test_signature_image(self, png_bytes):
        # Arrange
        template = Template.model_validate({
            "elements": [
                {"id": "sig", "type": "signature", "signatureImage": data_url(png_bytes)},
                {"id": "blank-sig", "type": "signature"},
            ]
        })

        # Act
        images = resolve_assets(template, RenderOptions())

        # Assert
        assert set(images) == {"sig"}

    def test_hidden_elements_are_not_decoded(self, png_bytes):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "stamp", "type": "image", "content": data_url(png_bytes), "visible": False}]
        })

        # Act & Assert
        assert resolve_assets(template, RenderOptions()) == {}
