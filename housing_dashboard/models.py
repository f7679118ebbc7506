"""Data models for FRED series."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pandas as pd


def empty_observations() -> pd.DataFrame:
    return pd.DataFrame(
        {"date": pd.Series(dtype="datetime64[ns]"), "value": pd.Series(dtype="float64")}
    )


@dataclass(frozen=True, eq=False)
class FredSeries:
    """
    A FRED series: observations plus the metadata needed to display them.

    ``observations`` has ``date`` and ``value`` columns in ascending date
    order. Missing FRED values are NaN.
    """

    series_id: str
    units: str = ""
    title: str = ""
    frequency: str = ""
    last_updated: Optional[datetime] = None
    notes: str = ""
    observations: pd.DataFrame = field(default_factory=empty_observations)

    @property
    def values(self) -> pd.Series:
        """Observation values in chronological order."""
        return self.observations["value"]

    @property
    def dates(self) -> pd.Series:
        return self.observations["date"]

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def empty(self) -> bool:
        return self.observations.empty

    def latest(self) -> Optional[pd.Series]:
        """Return the last observation row, or None for an empty series."""
        if self.empty:
            return None
        return self.observations.iloc[-1]
