"""Amount in Words (Indian numbering)

Converts rupee amounts to words using Crore / Lakh / Thousand grouping,
e.g. 1234567.50 -> "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven
Rupees and Fifty Paise".
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union
from num2words import num2words

CRORE = 10_000_000


def _cardinal(number: int) -> List[str]:
    """Title-cased words for a non-negative integer, without commas or 'and'"""
    if number >= CRORE:
        # en_IN stops at crore; larger crore counts are grouped themselves ("One Thousand Crore")
        crores, rest = divmod(number, CRORE)
        return _cardinal(crores) + ["Crore"] + (_cardinal(rest) if rest else [])
    words = num2words(number, lang="en_IN").replace(",", " ").replace("-", " ")
    return [word.capitalize() for word in words.split() if word != "and"]


def to_words(amount: Union[Decimal, float, int, str]) -> str:
    """
    Convert an amount to Indian rupee words

    Args:
        amount: Amount in rupees; paise are rounded half-up to 2 places

    Returns:
        "<words> Rupees[ and <words> Paise]"; zero rupees is "Zero Rupees"
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    negative = value < 0
    value = abs(value)

    rupees = int(value)
    paise = int((value - rupees) * 100)

    result = " ".join(_cardinal(rupees)) + " Rupees"
    if paise > 0:
        result += " and " + " ".join(_cardinal(paise)) + " Paise"
    if negative:
        result = "Minus " + result
    return result
