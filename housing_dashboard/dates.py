"""Date sequence generation for gap filling and chart axes."""

import logging

import pandas as pd

logger = logging.getLogger(__name__)

# Months per step, keyed by frequency name and FRED frequency code
FREQUENCY_MONTHS = {
    "monthly": 1,
    "m": 1,
    "quarterly": 3,
    "q": 3,
    "annual": 12,
    "a": 12,
}


def create_date_sequence(start_date, end_date, frequency: str = "monthly") -> pd.DatetimeIndex:
    """
    Create calendar-anchored dates from ``start_date`` up to ``end_date``.

    Each step is computed from the start date, so the day of month is kept
    and clipped at month end (Jan 31, Feb 29, Mar 31, ...).

    Args:
        start_date: First date of the sequence (str, date or Timestamp)
        end_date: Last allowed date, included if it falls on a step
        frequency: "monthly", "quarterly" or "annual" (or m/q/a);
            anything else is treated as monthly

    Returns:
        DatetimeIndex of step dates, empty if end_date precedes start_date
    """
    start = pd.Timestamp(start_date).normalize()
    end = pd.Timestamp(end_date).normalize()

    step = FREQUENCY_MONTHS.get(str(frequency).lower())
    if step is None:
        logger.debug(f"Unknown frequency {frequency!r}, using monthly")
        step = 1

    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current = start + pd.DateOffset(months=step * len(dates))

    return pd.DatetimeIndex(dates, name="date")
