"""GST Tax Engine

Aggregates line items into totals and splits the tax into CGST/SGST or IGST.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from src.domain.amount_in_words import to_words
from src.domain.invoice_document import InvoiceDocument, LineItem

ZERO = Decimal("0")


@dataclass(frozen=True)
class Totals:
    """Invoice level sums over all line items"""

    subtotal: Decimal
    total_tax: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    """
    GST split for a whole invoice

    Exactly one of (cgst + sgst) or igst is non-zero. Intra-state halves are
    kept exact so cgst == sgst and cgst + sgst + igst == total tax.
    """

    cgst: Decimal
    sgst: Decimal
    igst: Decimal

    def as_dict(self) -> dict:
        return {"CGST": self.cgst, "SGST": self.sgst, "IGST": self.igst}


def compute_totals(items: Iterable[LineItem]) -> Totals:
    """Sum line amounts and line taxes"""
    subtotal = ZERO
    total_tax = ZERO
    for item in items:
        subtotal += item.amount
        total_tax += item.tax_amount
    return Totals(subtotal=subtotal, total_tax=total_tax, grand_total=subtotal + total_tax)


def is_intra_state(customer_state: Optional[str], company_state: Optional[str]) -> bool:
    """Exact, case-sensitive comparison; no normalisation of state names"""
    return customer_state == company_state


def compute_breakdown(
    items: Iterable[LineItem],
    customer_state: Optional[str],
    company_state: Optional[str],
) -> TaxBreakdown:
    """
    Split the invoice tax into CGST/SGST (same state) or IGST (different states)

    The intra/inter-state decision is made once and applies to every line.
    """
    total_tax = sum((item.tax_amount for item in items), ZERO)
    if is_intra_state(customer_state, company_state):
        half = total_tax / 2
        return TaxBreakdown(cgst=half, sgst=half, igst=ZERO)
    return TaxBreakdown(cgst=ZERO, sgst=ZERO, igst=total_tax)


@dataclass(frozen=True)
class InvoiceFigures:
    """Everything printed about an invoice's money, computed once per render"""

    totals: Totals
    breakdown: TaxBreakdown
    amount_in_words: str


def compute_figures(invoice: InvoiceDocument) -> InvoiceFigures:
    """Run the tax engine once for an invoice"""
    totals = compute_totals(invoice.items)
    breakdown = compute_breakdown(
        invoice.items,
        customer_state=invoice.customer.state,
        company_state=invoice.company.state,
    )
    return InvoiceFigures(totals=totals, breakdown=breakdown, amount_in_words=to_words(totals.grand_total))
