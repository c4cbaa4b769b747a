"""
Display formatting for calculator amounts.
"""

import re
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")

# Longest digit run that still converts to a float exactly
MAX_INPUT_DIGITS = 15
MAX_INPUT_VALUE = 10 ** MAX_INPUT_DIGITS - 1


def format_input_text(amount: Optional[float]) -> str:
    """
    Format an amount for the editable amount field, e.g. 1234567 -> "1,234,567".

    None (no value) formats as an empty string.
    """
    if amount is None:
        return ""
    return f"{int(round(amount)):,}"


def parse_input_text(text: Optional[str]) -> Optional[int]:
    """
    Parse user-typed amount text.

    Every non-digit character is stripped before parsing, so "€1,250,000"
    and "1 250 000" both parse to 1250000. Values longer than
    MAX_INPUT_DIGITS saturate at MAX_INPUT_VALUE.

    Returns:
        Parsed integer, or None if no digits remain
    """
    if not text:
        return None
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return None
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_INPUT_DIGITS:
        return MAX_INPUT_VALUE
    return int(digits)


def format_currency(amount: float, symbol: str) -> str:
    """Format an amount with its currency symbol, e.g. "€475,000"."""
    return f"{symbol}{format_input_text(amount)}"


def format_axis_value(amount: float, symbol: str) -> str:
    """Chart axis label in millions, e.g. "$1.1M"."""
    return f"{symbol}{amount / 1_000_000:.1f}M"
