import pytest

from src.domain.invoice_document import InvoiceDocument
from src.domain.template import Template


@pytest.fixture
def sample_invoice():
    """Intra-state invoice worth 4000 before 18% GST"""
    return InvoiceDocument.model_validate({
        "invoiceNumber": "INV-2024-000123",
        "date": "2024-04-01",
        "company": {"name": "Shree Textiles", "state": "Maharashtra"},
        "customer": {"name": "Acme Traders", "state": "Maharashtra"},
        "items": [
            {"description": "Cotton fabric", "quantity": 2, "rate": 1000, "taxRate": 18},
            {"description": "Silk fabric", "quantity": 1, "rate": 2000, "taxRate": 18},
        ],
    })


@pytest.fixture
def sample_template():
    return Template.model_validate({
        "id": "tpl_saved",
        "name": "Saved layout",
        "elements": [
            {"id": "title", "type": "text", "x": 50, "y": 50, "width": 200, "height": 20,
             "content": "Invoice {invoiceNumber}"},
        ],
    })


@pytest.fixture
def sample_pdf_bytes():
    """Sample PDF bytes for testing"""
    return b"%PDF-1.4\nTest PDF content"
