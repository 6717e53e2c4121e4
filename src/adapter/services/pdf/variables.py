"""Template variable resolution

Replaces ``{path.to.value}`` placeholders with values from a data context.
Unresolvable placeholders stay in the text verbatim; substitution is a single
non-recursive pass, so values containing braces are never expanded again.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Iterable

from src.domain.invoice_document import InvoiceDocument
from src.domain.tax import TaxBreakdown, Totals
from src.adapter.services.pdf.formatting import format_amount, format_date

PLACEHOLDER = re.compile(r"\{(\w+(?:\.\w+)*)\}")

_MISSING = object()


def lookup(context: Any, path: str) -> Any:
    """
    Walk a dot-separated path through mappings, sequences and attributes

    Private names and callables are misses, so only data reaches a document.
    """
    current = context
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            # Only ASCII digits index; other Unicode digits are misses
            if not (segment.isascii() and segment.isdigit()):
                return _MISSING
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        elif segment.startswith("_"):
            return _MISSING
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING or current is None or callable(current):
            return _MISSING
    return current


def resolve(text: str, context: Any) -> str:
    """
    Substitute placeholders in text

    Args:
        text: Text that may contain ``{identifier(.identifier)*}`` placeholders
        context: Mapping (or object) the paths are resolved against

    Returns:
        Text with every resolvable placeholder replaced by the value's string form
    """
    if not text or "{" not in text:
        return text

    def _replace(match: "re.Match") -> str:
        value = lookup(context, match.group(1))
        if value is _MISSING:
            return match.group(0)
        return str(value)

    return PLACEHOLDER.sub(_replace, text)


def build_context(
    invoice: InvoiceDocument,
    totals: Totals,
    breakdown: TaxBreakdown,
    amount_in_words: str,
    default_terms: Iterable[str],
) -> dict:
    """Data context exposed to template text elements"""
    company = _party(invoice.company)
    customer = _party(invoice.customer)
    return {
        "invoiceNumber": invoice.invoice_number,
        "invoiceDate": format_date(invoice.invoice_date),
        "dueDate": format_date(invoice.due_date),
        "company": company,
        "customer": customer,
        "items": invoice.items,
        "totals": {
            "subtotal": format_amount(totals.subtotal),
            "totalTax": format_amount(totals.total_tax),
            "grandTotal": format_amount(totals.grand_total),
        },
        "tax": {
            "cgst": format_amount(breakdown.cgst),
            "sgst": format_amount(breakdown.sgst),
            "igst": format_amount(breakdown.igst),
        },
        "amountInWords": amount_in_words,
        "notes": invoice.notes or "",
        "terms": invoice.terms or "\n".join(default_terms),
        # Flat names used by the designer's stock template
        "companyName": company["name"],
        "companyAddress": company["address"],
        "companyGSTIN": company["gstin"],
        "customerName": customer["name"],
        "customerAddress": customer["address"],
        "customerGSTIN": customer["gstin"],
    }


def _party(party) -> dict:
    return {
        "name": party.name,
        "address": party.address or "",
        "gstin": party.gstin or "",
        "state": party.state or "",
        "phone": party.phone or "",
        "email": party.email or "",
    }
