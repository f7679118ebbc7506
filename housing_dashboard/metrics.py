"""
Derived metrics for FRED series: percentage changes and summary statistics.

Functions here compute numbers. Rendering goes through
``housing_dashboard.formatting`` so both halves can be tested separately.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from housing_dashboard.formatting import format_value, is_missing
from housing_dashboard.models import FredSeries

logger = logging.getLogger(__name__)

STATISTIC_NAMES = [
    "Count",
    "Mean",
    "Median",
    "Standard Deviation",
    "Minimum",
    "Maximum",
    "First Quartile",
    "Third Quartile",
]

NO_DATA = "No data available"
NO_VALID_DATA = "No valid data points"


class SummaryStatistics(NamedTuple):
    """Descriptive statistics over the non-missing values of a series."""

    count: int
    mean: float
    median: float
    std: float
    minimum: float
    maximum: float
    first_quartile: float
    third_quartile: float


def _as_values(data) -> pd.Series:
    """Coerce a FredSeries, observation frame or sequence to a float Series."""
    if isinstance(data, FredSeries):
        data = data.values
    elif isinstance(data, pd.DataFrame):
        data = data["value"]
    # Float64 maps None, NaN and pd.NA alike to a masked NA
    values = pd.array(list(data), dtype="Float64")
    return pd.Series(values.to_numpy(dtype="float64", na_value=np.nan))


def calculate_change(data, periods: int = 1) -> Optional[float]:
    """
    Calculate the percentage change between the latest observation and the
    observation ``periods`` steps before it.

    Args:
        data: FredSeries, frame with a ``value`` column, or sequence of
            values in chronological order
        periods: Lookback window (1 = period over period, 12 = year over
            year for monthly data)

    Returns:
        Percentage change, or None when it is undefined (not enough history,
        a missing endpoint, or a previous value of exactly zero)
    """
    if periods < 0:
        raise ValueError(f"periods must be non-negative, got {periods}")

    values = _as_values(data)
    if len(values) < periods + 1:
        return None

    current_value = values.iloc[-1]
    previous_value = values.iloc[-periods - 1]

    if is_missing(current_value) or is_missing(previous_value) or previous_value == 0:
        return None

    return float(((current_value - previous_value) / previous_value) * 100)


def safe_divide(x, y) -> Optional[float]:
    """Divide, returning None for a missing or zero denominator."""
    if is_missing(y) or y == 0 or is_missing(x):
        return None
    return float(x / y)


def compute_summary_statistics(values) -> Optional[SummaryStatistics]:
    """
    Compute descriptive statistics, ignoring missing values.

    Quartiles use linear interpolation between order statistics. The
    standard deviation is the sample one and is NaN for a single value.

    Returns:
        SummaryStatistics, or None if there are no valid values
    """
    clean_values = _as_values(values).dropna().to_numpy()
    if clean_values.size == 0:
        return None

    count = int(clean_values.size)
    std = float(np.std(clean_values, ddof=1)) if count > 1 else float("nan")

    return SummaryStatistics(
        count=count,
        mean=float(np.mean(clean_values)),
        median=float(np.median(clean_values)),
        std=std,
        minimum=float(np.min(clean_values)),
        maximum=float(np.max(clean_values)),
        first_quartile=float(np.percentile(clean_values, 25)),
        third_quartile=float(np.percentile(clean_values, 75)),
    )


def create_summary_stats(values, units: Optional[str]) -> pd.DataFrame:
    """
    Create the summary statistics table shown next to the chart.

    Args:
        values: Raw series values, possibly containing missing entries
        units: Units label used to format every statistic except Count

    Returns:
        DataFrame with ``Statistic`` and ``Value`` columns
    """
    values = _as_values(values)
    if values.empty:
        return pd.DataFrame({"Statistic": [NO_DATA], "Value": [""]})

    stats = compute_summary_statistics(values)
    if stats is None:
        logger.debug("All values missing, no statistics to report")
        return pd.DataFrame({"Statistic": [NO_VALID_DATA], "Value": [""]})

    formatted = [stats.count] + [format_value(value, units) for value in stats[1:]]

    return pd.DataFrame(
        {"Statistic": STATISTIC_NAMES, "Value": pd.Series(formatted, dtype="object")}
    )
