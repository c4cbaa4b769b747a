"""
Currency Conversion

Converts reference-currency (USD) amounts into display currencies and back.
Converted amounts are rounded to a clean denomination that scales with
magnitude, so a USD 500,000 investment shows as EUR 475,000 rather than
EUR 474,890.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

logger = logging.getLogger(__name__)

REFERENCE_CURRENCY = "USD"
REFERENCE_RATE = 1.0


@dataclass(frozen=True)
class Currency:
    """A supported display currency."""

    code: str
    symbol: str
    name: str


SUPPORTED_CURRENCIES: List[Currency] = [
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("PHP", "₱", "Philippine Peso"),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("CNY", "¥", "Chinese Yuan"),
]

# 1 USD = rate units of each currency; used when live rates are unavailable
FALLBACK_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.95,
    "GBP": 0.79,
    "PHP": 58.5,
    "SGD": 1.35,
    "CNY": 7.25,
}


@dataclass(frozen=True)
class RoundingBracket:
    """Amounts at or above lower_bound are rounded to a multiple of step."""

    lower_bound: float
    step: float


# Ordered from the largest lower bound down; the last bracket must start at 0
DEFAULT_ROUNDING_BRACKETS: Tuple[RoundingBracket, ...] = (
    RoundingBracket(1_000_000, 100_000),
    RoundingBracket(100_000, 10_000),
    RoundingBracket(10_000, 1_000),
    RoundingBracket(0, 100),
)


def get_currency(code: str) -> Currency:
    """
    Look up a supported currency by code.

    Unknown codes resolve to the reference currency, matching the rate 1
    fallback in resolve_rate.
    """
    for currency in SUPPORTED_CURRENCIES:
        if currency.code == code:
            return currency
    return get_currency(REFERENCE_CURRENCY)


def round_half_up(value: float) -> float:
    """Round to the nearest whole number, halves away from zero for positives."""
    return float(math.floor(value + 0.5))


def denomination_step(
    raw: float,
    brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
) -> float:
    """
    Return the rounding step for an amount's magnitude.

    Args:
        raw: Converted (unrounded) amount
        brackets: Rounding table ordered by descending lower bound

    Returns:
        Step size the amount should be rounded to
    """
    for bracket in brackets:
        if raw >= bracket.lower_bound:
            return bracket.step
    return brackets[-1].step


def round_to_denomination(
    raw: float,
    brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
) -> float:
    """Round an amount to the nearest multiple of its bracket's step."""
    step = denomination_step(raw, brackets)
    return round_half_up(raw / step) * step


def convert_to_display(
    amount_ref: float,
    rate: float,
    brackets: Sequence[RoundingBracket] = DEFAULT_ROUNDING_BRACKETS,
) -> float:
    """
    Convert a reference-currency amount into the display currency.

    A rate of exactly 1 means the display currency is the reference
    currency (or an unknown code that fell back to it), and the amount is
    returned unchanged. Any other rate produces a denomination-rounded value.

    Args:
        amount_ref: Amount in reference currency (>= 0)
        rate: Units of display currency per reference unit (> 0)
        brackets: Rounding table

    Returns:
        Display amount

    Raises:
        ValueError: If the converted amount overflows
    """
    if rate == REFERENCE_RATE:
        return amount_ref
    raw = amount_ref * rate
    if not math.isfinite(raw):
        raise ValueError("Converted amount exceeds the representable range")
    return round_to_denomination(raw, brackets)


def convert_to_reference(amount_display: float, rate: float) -> float:
    """
    Convert a display-currency amount back to the reference currency.

    No denomination rounding is applied, only rounding to a whole unit.
    The round trip through convert_to_display is lossy.
    """
    if rate == REFERENCE_RATE:
        return amount_display
    raw = amount_display / rate
    if not math.isfinite(raw):
        raise ValueError("Converted amount exceeds the representable range")
    return round_half_up(raw)


def resolve_rate(
    rates: Mapping[str, float],
    code: str,
    reference: str = REFERENCE_CURRENCY,
) -> Tuple[float, bool]:
    """
    Look up the rate for a display currency.

    Args:
        rates: Exchange rate table keyed by currency code
        code: Requested display currency
        reference: Reference currency code, always rate 1

    Returns:
        Tuple of (rate, used_fallback). Unknown codes and non-positive
        or non-finite rates resolve to the reference rate with used_fallback set.
    """
    if code == reference:
        return REFERENCE_RATE, False

    rate = rates.get(code)
    if rate is None or not math.isfinite(rate) or rate <= 0:
        logger.warning(
            f"No usable exchange rate for {code}, falling back to {reference} rate"
        )
        return REFERENCE_RATE, True

    return float(rate), False
