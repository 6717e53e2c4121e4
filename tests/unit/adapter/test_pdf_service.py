"""Unit tests for ReportLabPdfService

Tests cover:
- Document assembly flow (element pass then fixed supplementary blocks)
- Tax summary selection (CGST/SGST vs IGST)
- Table and totals placement
- Generated PDF content, metadata and page size (read back with PyPDF2)
- Signature form field, annotations overlay and merge
- Fatal errors for unreadable source documents
"""

import pytest
from io import BytesIO
from PyPDF2 import PdfReader

from src.adapter.services.pdf.renderers import TABLE_HEADER_FILL
from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.services.pdf_service import DocumentGenerationError, RenderOptions
from src.domain.annotation import Annotation
from src.domain.invoice_document import InvoiceDocument
from src.domain.style import Rgb
from src.domain.tax import compute_figures
from src.domain.template import Template


@pytest.fixture
def pdf_service():
    return ReportLabPdfService(
        currency_prefix="Rs. ",
        default_terms=["1. Payment is due within 30 days of invoice date."],
        creator="test-suite",
    )


@pytest.fixture
def name_template():
    """Single text element showing the customer name at (50, 50)"""
    return Template.model_validate({
        "id": "tpl_name",
        "elements": [
            {"id": "customer-name", "type": "text", "x": 50, "y": 50, "width": 300, "height": 20,
             "content": "{customer.name}"},
        ],
    })


def read_pdf(pdf_bytes: bytes) -> PdfReader:
    return PdfReader(BytesIO(pdf_bytes))


def page_text(pdf_bytes: bytes, index: int = 0) -> str:
    return read_pdf(pdf_bytes).pages[index].extract_text()


class TestRenderInvoice:
    """Test the assembly flow against a recording surface"""

    def test_template_text_is_drawn_at_its_position(self, pdf_service, surface, name_template, invoice):
        """
        Given: A template with '{customer.name}' at (50, 50)
        When: The invoice is rendered
        Then: 'Acme Traders' is drawn at (50, 50)
        """
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        call = surface.text_call("Acme Traders")
        assert (call["x"], call["y"]) == (50, 50)

    def test_intra_state_summary_shows_cgst_and_sgst(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        texts = surface.texts
        assert "CGST:" in texts
        assert "SGST:" in texts
        assert "IGST:" not in texts
        assert texts.count("Rs. 360.00") == 2
        assert "Rs. 720.00" in texts
        assert "Rs. 4720.00" in texts

    def test_inter_state_summary_shows_igst_only(self, pdf_service, surface, name_template, invoice):
        # Arrange
        invoice = invoice.model_copy(
            update={"customer": invoice.customer.model_copy(update={"state": "Karnataka"})}
        )

        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        texts = surface.texts
        assert "IGST:" in texts
        assert "CGST:" not in texts
        assert "SGST:" not in texts

    def test_grand_total_box_and_amount_in_words(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        box = next(f for f in surface.of("fill_rect") if f["color"] == Rgb.gray(0.1))
        assert (box["width"], box["height"]) == (200, 25)
        assert surface.text_call("Grand Total:")["color"] == Rgb(1.0, 1.0, 1.0)
        assert "Amount in Words:" in surface.texts
        assert "Four Thousand Seven Hundred Twenty Rupees Only" in surface.texts

    def test_default_terms_when_invoice_has_none(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        assert "Terms & Conditions:" in surface.texts
        assert "1. Payment is due within 30 days of invoice date." in surface.texts

    def test_invoice_terms_and_notes_replace_defaults(self, pdf_service, surface, name_template, invoice):
        # Arrange
        invoice = invoice.model_copy(update={"terms": "Net 15.\nE&OE.", "notes": "Deliver to gate 2"})

        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        texts = surface.texts
        assert "Net 15." in texts
        assert "E&OE." in texts
        assert "1. Payment is due within 30 days of invoice date." not in texts
        assert "Deliver to gate 2" in texts

    def test_table_without_element_uses_default_position(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        header = next(f for f in surface.of("fill_rect") if f["color"] == TABLE_HEADER_FILL)
        assert (header["x"], header["y"]) == (50, 280)

    def test_table_drawn_at_table_element(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "items-table", "type": "table", "x": 20, "y": 400, "width": 0, "height": 25}]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        header = next(f for f in surface.of("fill_rect") if f["color"] == TABLE_HEADER_FILL)
        assert (header["x"], header["y"]) == (20, 400)

    def test_hidden_table_element_suppresses_table(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "items-table", "type": "table", "x": 20, "y": 400, "width": 500,
                          "height": 25, "visible": False}]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        assert "S.No" not in surface.texts
        assert "Cotton fabric" not in surface.texts

    def test_totals_anchor_positions_summary(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "total-section", "type": "rectangle", "x": 320, "y": 500, "width": 225, "height": 120}]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        heading = surface.text_call("Tax Summary:")
        assert (heading["x"], heading["y"]) == (320, 500)

    def test_hidden_totals_anchor_still_positions_summary(self, pdf_service, surface, invoice):
        """
        Given: A hidden 'total-section' element at (320, 500)
        When: The invoice is rendered
        Then: The element is not drawn but the summary still sits at its position
        """
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "total-section", "type": "rectangle", "x": 320, "y": 500, "width": 225,
                          "height": 120, "visible": False}]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        heading = surface.text_call("Tax Summary:")
        assert (heading["x"], heading["y"]) == (320, 500)
        drawn = surface.of("fill_rect") + surface.of("stroke_rect")
        assert not [r for r in drawn if (r["width"], r["height"]) == (225, 120)]

    def test_table_element_draws_table_once(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "items-table", "type": "table", "x": 20, "y": 400, "width": 0, "height": 25}]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        headers = [f for f in surface.of("fill_rect") if f["color"] == TABLE_HEADER_FILL]
        assert len(headers) == 1
        assert surface.texts.count("Cotton fabric") == 1

    def test_hidden_elements_are_not_drawn(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [
                {"id": "secret", "type": "text", "x": 0, "y": 0, "width": 10, "height": 10,
                 "content": "INTERNAL ONLY", "visible": False},
            ]
        })

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        assert "INTERNAL ONLY" not in surface.texts

    def test_non_white_background_is_filled_first(self, pdf_service, surface, name_template, invoice):
        # Arrange
        template = name_template.model_copy(update={"background_color": "#fffbe6"})

        # Act
        pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        name, first = surface.calls[0]
        assert name == "fill_rect"
        assert (first["x"], first["y"], first["width"], first["height"]) == (0, 0, surface.width, surface.height)

    def test_white_background_is_not_filled(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        assert surface.calls[0] == (
            "draw_text",
            dict(x=50, y=50, text="Acme Traders", font_name="Helvetica", size=12, color=Rgb(0.0, 0.0, 0.0)),
        )

    def test_fixed_signature_block_without_signature_element(self, pdf_service, surface, name_template, invoice):
        # Act
        area = pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        assert "For Shree Textiles" in surface.texts
        assert "Authorized Signatory" in surface.texts
        assert (area.width, area.height) == (150, 50)

    def test_signature_element_replaces_fixed_block(self, pdf_service, surface, invoice):
        # Arrange
        template = Template.model_validate({
            "elements": [{"id": "signature-area", "type": "signature", "x": 380, "y": 720, "width": 160, "height": 60}]
        })

        # Act
        area = pdf_service.render_invoice(surface, template, invoice, RenderOptions())

        # Assert
        assert "For Shree Textiles" not in surface.texts
        assert tuple(area) == (380, 720, 160, 60)

    def test_qr_placeholder_and_watermark(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(
            surface, name_template, invoice,
            RenderOptions(enable_qr_placeholder=True, watermark_text="PROFORMA"),
        )

        # Assert
        assert "QR Code" in surface.texts
        qr = next(f for f in surface.of("fill_rect") if f["color"] == Rgb.gray(0.9))
        assert (qr["width"], qr["height"]) == (80, 80)
        assert surface.calls[-1][0] == "draw_rotated_text"
        assert surface.of("draw_rotated_text")[0]["text"] == "PROFORMA"

    def test_no_extras_by_default(self, pdf_service, surface, name_template, invoice):
        # Act
        pdf_service.render_invoice(surface, name_template, invoice, RenderOptions())

        # Assert
        assert "QR Code" not in surface.texts
        assert surface.of("draw_rotated_text") == []


class TestGenerateInvoice:
    """Test generated PDF documents"""

    def test_customer_name_in_text_layer(self, pdf_service, name_template, invoice):
        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice, name_template)

        # Assert
        assert pdf_bytes.startswith(b"%PDF")
        assert "Acme Traders" in page_text(pdf_bytes)

    def test_default_template_when_none_given(self, pdf_service, invoice):
        """
        Given: No template
        When: generate_invoice is called
        Then: The built-in layout renders header, table and totals
        """
        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice)

        # Assert
        text = page_text(pdf_bytes)
        assert "TAX INVOICE" in text
        assert "INV-2024-000123" in text
        assert "Shree Textiles" in text
        assert "Cotton fabric" in text
        assert "Grand Total" in text

    def test_metadata(self, pdf_service, invoice):
        # Act
        metadata = read_pdf(pdf_service.generate_invoice(invoice)).metadata

        # Assert
        assert metadata.title == "INV-2024-000123 - Shree Textiles"
        assert metadata.subject == "GST Compliant Invoice"
        assert metadata.author == "Shree Textiles"
        assert metadata.creator == "test-suite"

    def test_landscape_page_size(self, pdf_service, invoice):
        # Arrange
        template = Template.model_validate({"pageSize": "Letter", "orientation": "landscape"})

        # Act
        page = read_pdf(pdf_service.generate_invoice(invoice, template)).pages[0]

        # Assert
        assert float(page.mediabox.width) == pytest.approx(792)
        assert float(page.mediabox.height) == pytest.approx(612)

    def test_unknown_page_size_renders_a4(self, pdf_service, invoice):
        # Arrange
        template = Template.model_validate({"pageSize": "Tabloid"})

        # Act
        page = read_pdf(pdf_service.generate_invoice(invoice, template)).pages[0]

        # Assert
        assert float(page.mediabox.width) == pytest.approx(595.28)

    def test_logo_and_broken_image_still_render(self, pdf_service, invoice, png_bytes):
        """Test a broken inline image is skipped while the logo is drawn"""
        # Arrange
        template = Template.model_validate({
            "elements": [
                {"id": "logo", "type": "logo", "x": 450, "y": 40, "width": 100, "height": 60},
                {"id": "stamp", "type": "image", "x": 50, "y": 40, "width": 50, "height": 50,
                 "content": "data:image/png;base64,AAAA"},
            ]
        })

        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice, template, RenderOptions(logo_asset=png_bytes))

        # Assert
        assert len(read_pdf(pdf_bytes).pages) == 1

    def test_signature_field(self, pdf_service, invoice):
        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice, options=RenderOptions(enable_signature_field=True))

        # Assert
        fields = read_pdf(pdf_bytes).get_fields()
        assert "signature" in fields
        assert fields["signature"]["/FT"] == "/Sig"

    def test_no_signature_field_by_default(self, pdf_service, invoice):
        # Act
        fields = read_pdf(pdf_service.generate_invoice(invoice)).get_fields()

        # Assert
        assert not fields

    def test_minimal_invoice_renders(self, pdf_service):
        """Test an invoice with no items and no optional data still renders"""
        # Arrange
        invoice = InvoiceDocument.model_validate({
            "invoiceNumber": "INV-0",
            "date": "2024-04-01",
            "company": {"name": "Shree Textiles"},
            "customer": {"name": "Walk-in"},
        })

        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice)

        # Assert
        assert "Zero Rupees Only" in page_text(pdf_bytes)

    def test_failure_is_raised_as_generation_error(self, pdf_service, name_template, invoice, monkeypatch):
        # Arrange
        def explode(*args, **kwargs):
            raise RuntimeError("canvas exploded")
        monkeypatch.setattr(pdf_service, "render_invoice", explode)

        # Act & Assert
        with pytest.raises(DocumentGenerationError, match="canvas exploded"):
            pdf_service.generate_invoice(invoice, name_template)

    def test_given_figures_are_not_recomputed(self, pdf_service, name_template, invoice, monkeypatch):
        """
        Given: Figures already computed by the caller
        When: The invoice is generated with them
        Then: The tax engine is not run again and the figures are printed
        """
        # Arrange
        figures = compute_figures(invoice)

        def recompute(*args, **kwargs):
            raise AssertionError("figures computed twice")
        monkeypatch.setattr("src.adapter.services.pdf_service.compute_figures", recompute)

        # Act
        pdf_bytes = pdf_service.generate_invoice(invoice, name_template, figures=figures)

        # Assert
        assert "Four Thousand Seven Hundred Twenty Rupees Only" in page_text(pdf_bytes)


class TestPostProcessing:
    """Test annotations and merge"""

    def test_add_annotations(self, pdf_service, name_template, invoice):
        # Arrange
        source = pdf_service.generate_invoice(invoice, name_template)
        annotations = [
            Annotation(type="text", pageIndex=0, x=300, y=60, content="Reviewed by accounts"),
            Annotation(type="highlight", x=45, y=38, width=120, height=16),
            Annotation(type="rectangle", x=40, y=30, width=200, height=40),
        ]

        # Act
        result = pdf_service.add_annotations(source, annotations)

        # Assert
        text = page_text(result)
        assert "Reviewed by accounts" in text
        assert "Acme Traders" in text

    def test_annotation_for_missing_page_is_skipped(self, pdf_service, name_template, invoice):
        # Arrange
        source = pdf_service.generate_invoice(invoice, name_template)

        # Act
        result = pdf_service.add_annotations(source, [Annotation(type="text", pageIndex=3, content="Lost")])

        # Assert
        assert len(read_pdf(result).pages) == 1
        assert "Lost" not in page_text(result)

    @pytest.mark.parametrize("source", [b"", b"not a pdf", b"%PDF-1.4\ngarbage"])
    def test_unreadable_source_is_fatal(self, pdf_service, source):
        with pytest.raises(DocumentGenerationError):
            pdf_service.add_annotations(source, [Annotation(type="text", content="x")])

    def test_merge_documents(self, pdf_service, name_template, invoice):
        # Arrange
        first = pdf_service.generate_invoice(invoice, name_template)
        second = pdf_service.generate_invoice(
            invoice.model_copy(update={"customer": invoice.customer.model_copy(update={"name": "Beta Stores"})}),
            name_template,
        )

        # Act
        merged = pdf_service.merge_documents([first, second])

        # Assert
        assert len(read_pdf(merged).pages) == 2
        assert "Acme Traders" in page_text(merged, 0)
        assert "Beta Stores" in page_text(merged, 1)

    def test_merge_nothing_is_an_error(self, pdf_service):
        with pytest.raises(DocumentGenerationError):
            pdf_service.merge_documents([])

    def test_merge_with_unreadable_document_is_fatal(self, pdf_service, name_template, invoice):
        # Arrange
        good = pdf_service.generate_invoice(invoice, name_template)

        # Act & Assert
        with pytest.raises(DocumentGenerationError):
            pdf_service.merge_documents([good, b"not a pdf"])
