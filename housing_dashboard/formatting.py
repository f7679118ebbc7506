"""
Value formatting for FRED series.

Numbers are rendered according to the series' free-text units label
(e.g. "Percent", "Dollars", "Index 1982-84=100", "Thousands of Units").
"""

import logging
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

MISSING_VALUE = "N/A"


class UnitClass(Enum):
    PERCENT_OR_RATE = "percent_or_rate"
    DOLLARS_OR_PRICE = "dollars_or_price"
    THOUSANDS = "thousands"
    MILLIONS = "millions"
    INDEX = "index"
    GENERIC = "generic"


# Checked in order, first match wins. "Millions of Dollars" is a dollar
# series and "Percent Change in Price Index" is a percent series.
UNIT_PATTERNS = (
    (UnitClass.PERCENT_OR_RATE, ("percent", "rate")),
    (UnitClass.DOLLARS_OR_PRICE, ("dollars", "price")),
    (UnitClass.THOUSANDS, ("thousands",)),
    (UnitClass.MILLIONS, ("millions",)),
    (UnitClass.INDEX, ("index",)),
)


def is_missing(value) -> bool:
    """True for None, NaN, NaT and pd.NA."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def classify_units(units: Optional[str]) -> UnitClass:
    """
    Classify a units label by case-insensitive substring match.

    Args:
        units: Units string from the series metadata

    Returns:
        The first matching UnitClass, or UnitClass.GENERIC
    """
    label = (units or "").lower()
    for unit_class, patterns in UNIT_PATTERNS:
        if any(pattern in label for pattern in patterns):
            return unit_class
    return UnitClass.GENERIC


def round_half_up(value: float, places: int) -> Decimal:
    """Round a float half-up on its shortest decimal representation."""
    number = Decimal(repr(float(value)))
    context = Context(prec=max(28, number.adjusted() + places + 2))
    rounded = number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=context)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return rounded


def format_number(value: float, places: int, grouped: bool = True) -> str:
    """
    Round ``value`` to ``places`` decimals and print it without trailing zeros.

    >>> format_number(1234.5, 2)
    '1,234.5'
    >>> format_number(1234.5, 2, grouped=False)
    '1234.5'
    """
    rounded = round_half_up(value, places)
    text = f"{rounded:,f}" if grouped else f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_value(value, units: Optional[str]) -> str:
    """
    Format a single value for display based on the series units.

    Args:
        value: Numeric value, or None/NaN for a missing observation
        units: Units label of the series the value belongs to

    Returns:
        Display string, "N/A" for missing values
    """
    if is_missing(value):
        return MISSING_VALUE

    unit_class = classify_units(units)

    if unit_class is UnitClass.PERCENT_OR_RATE:
        return f"{format_number(value, 2, grouped=False)}%"
    if unit_class is UnitClass.DOLLARS_OR_PRICE:
        return f"${format_number(value, 0)}"
    if unit_class is UnitClass.THOUSANDS:
        return f"{format_number(value, 1)}K"
    if unit_class is UnitClass.MILLIONS:
        return f"${format_number(value, 0)}M"
    if unit_class is UnitClass.INDEX:
        return format_number(value, 2, grouped=False)
    return format_number(value, 2)


def format_change(change: Optional[float]) -> str:
    """Format a percentage change with an explicit sign, e.g. "+1.25%"."""
    if is_missing(change):
        return MISSING_VALUE
    sign = "+" if change >= 0 else ""
    return f"{sign}{format_number(change, 2, grouped=False)}%"


def format_large_number(value) -> str:
    """Abbreviate large magnitudes with a B/M/K suffix."""
    if is_missing(value):
        return MISSING_VALUE

    magnitude = abs(value)
    if magnitude >= 1e9:
        return f"{format_number(value / 1e9, 1, grouped=False)}B"
    elif magnitude >= 1e6:
        return f"{format_number(value / 1e6, 1, grouped=False)}M"
    elif magnitude >= 1e3:
        return f"{format_number(value / 1e3, 1, grouped=False)}K"
    return format_number(value, 1, grouped=False)
