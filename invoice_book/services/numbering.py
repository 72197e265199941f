"""
Sequential invoice numbering.

Numbers look like ``201/031``: an unpadded series prefix, a slash, and a
three-digit suffix. A series holds 999 invoices; the next one rolls the
prefix forward and restarts the suffix at 001, the way manual invoice
books are numbered.
"""

import re

SEED_INVOICE_NUMBER = "201/031"
MAX_SUFFIX = 999
SUFFIX_WIDTH = 3

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(part: str) -> int | None:
    """Parse the leading integer of ``part``; trailing junk is ignored"""
    match = _LEADING_INT.match(part)
    if match is None:
        return None
    return int(match.group(1))


def next_invoice_number(current: str | None) -> str:
    """
    Compute the invoice number that follows ``current``.

    Args:
        current: Last used invoice number, or empty for a fresh book

    Returns:
        The seed number when ``current`` is empty, the incremented number when
        it parses, otherwise ``current`` unchanged. Never raises.
    """
    if not current:
        return SEED_INVOICE_NUMBER

    parts = current.split("/")
    if len(parts) != 2:
        return current

    prefix = _parse_int(parts[0])
    suffix = _parse_int(parts[1])
    if prefix is None or suffix is None:
        return current

    suffix += 1
    if suffix > MAX_SUFFIX:
        prefix += 1
        suffix = 1

    return f"{prefix}/{str(suffix).rjust(SUFFIX_WIDTH, '0')}"
