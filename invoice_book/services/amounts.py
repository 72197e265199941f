"""
Figures derived from an invoice for the printed layout: rupee/paise totals,
the total in words (Indian numbering), and display dates.
"""

from dataclasses import dataclass
from typing import Iterable

from ..models.invoice import LineItem

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
          "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Each scale above thousand groups two digits
_SCALES = ["Thousand", "Lakh", "Crore"]


@dataclass(frozen=True)
class InvoiceTotals:
    rupees: int
    paise: int


def _to_int(value: str) -> int:
    try:
        return int(value.strip()) if value and value.strip() else 0
    except ValueError:
        return 0


def invoice_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    """
    Sum the amount columns of the line items.

    Empty or non-numeric cells count as zero. Whole rupees in the paise
    column carry over.
    """
    items = list(items)
    raw_rs = sum(_to_int(item.amount_rs) for item in items)
    raw_ps = sum(_to_int(item.amount_ps) for item in items)
    return InvoiceTotals(rupees=raw_rs + raw_ps // 100, paise=raw_ps % 100)


def _below_thousand(n: int) -> str:
    words = []
    if n >= 100:
        words.append(f"{_ONES[n // 100]} Hundred")
        n %= 100
    if n > 0:
        if n < 10:
            words.append(_ONES[n])
        elif n < 20:
            words.append(_TEENS[n - 10])
        else:
            words.append(_TENS[n // 10] if n % 10 == 0 else f"{_TENS[n // 10]} {_ONES[n % 10]}")
    return " ".join(words)


def amount_in_words(n: int) -> str:
    """
    Spell out a non-negative whole amount using Indian numbering.

    >>> amount_in_words(123456)
    'One Lakh Twenty Three Thousand Four Hundred Fifty Six'

    The crore group holds two digits; anything above 99 crore is dropped.
    """
    if n == 0:
        return "Zero"

    result = _below_thousand(n % 1000)
    n //= 1000

    for scale in _SCALES:
        if n <= 0:
            break
        chunk = n % 100
        if chunk > 0:
            result = f"{_below_thousand(chunk)} {scale}" + (f" {result}" if result else "")
        n //= 100

    return result.strip()


def rupees_in_words(totals: InvoiceTotals) -> str:
    return f"Rupees {amount_in_words(totals.rupees)} Only."


def format_display_date(value: str) -> str:
    """Turn ``YYYY-MM-DD`` into ``DD-MM-YYYY``; other shapes pass through"""
    if not value:
        return ""
    parts = value.split("-")
    if len(parts) < 3 or not all(parts[:3]):
        return value
    year, month, day = parts[:3]
    return f"{day}-{month}-{year}"
