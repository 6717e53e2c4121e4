"""Value formatting for rendered invoices"""

from datetime import date
from decimal import Decimal
from typing import Optional

from src.domain.invoice_document import round2


def format_amount(value: Decimal) -> str:
    """Fixed 2 decimal places, no grouping (e.g. 4720.00)"""
    return f"{round2(Decimal(value)):.2f}"


def format_money(value: Decimal, prefix: str) -> str:
    return f"{prefix}{format_amount(value)}"


def format_number(value: Decimal) -> str:
    """Plain number without trailing zeros (2.000 -> 2, 2.50 -> 2.5)"""
    text = format(Decimal(value).normalize(), "f")
    return text


def format_date(value: Optional[date]) -> str:
    """Indian day-first date (dd/mm/yyyy); empty when missing"""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")
