"""
FRED Data Ingestion Module
Fetches housing market series and their metadata from the Federal Reserve
Economic Database (FRED).
"""

import argparse
import logging
import sys
from datetime import date
from typing import Optional

import pandas as pd
import requests

from housing_dashboard.config import (
    DEFAULT_LOOKBACK_YEARS,
    DEFAULT_SERIES,
    FRED_BASE_URL,
    HOUSING_SERIES,
    PERIODS_PER_YEAR,
    REQUEST_TIMEOUT,
    load_fred_api_key,
)
from housing_dashboard.formatting import format_change, format_value
from housing_dashboard.metrics import calculate_change, create_summary_stats
from housing_dashboard.models import FredSeries, empty_observations

logger = logging.getLogger(__name__)


class FREDDataFetcher:
    """
    Fetches observations and series metadata from the FRED API.
    """

    def __init__(self, api_key: Optional[str], base_url: str = FRED_BASE_URL):
        """
        Initialize the FRED data fetcher.

        Args:
            api_key: FRED API key for authentication
            base_url: FRED API root URL
        """
        if not api_key:
            raise ValueError("FRED API key is required. Set FRED_API_KEY environment variable.")

        self.api_key = api_key
        self.base_url = base_url
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FREDDataFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _get(self, endpoint: str, params: dict) -> dict:
        """
        Make a GET request against a FRED endpoint and decode the JSON body.

        Raises:
            requests.RequestException: If the request fails
            ValueError: If FRED reports an error in the response body
        """
        request_params = {"api_key": self.api_key, "file_type": "json", **params}
        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.get(url, params=request_params, timeout=REQUEST_TIMEOUT)
            data_json = response.json() if response.content else {}

            # FRED reports bad requests with a JSON error message
            if "error_message" in data_json:
                raise ValueError(f"FRED API error: {data_json['error_message']}")

            response.raise_for_status()
            return data_json

        except requests.RequestException as e:
            logger.error(f"Request to {endpoint} failed: {e}")
            raise

    def get_observations(
        self,
        series_id: str,
        start_date=None,
        end_date=None,
        frequency: Optional[str] = None,
    ) -> pd.DataFrame:
        """
        Fetch observations for a single series.

        Args:
            series_id: FRED series identifier (e.g., "HOUST")
            start_date: First observation date (inclusive)
            end_date: Last observation date (inclusive)
            frequency: FRED frequency code ("m", "q", "a") to aggregate to

        Returns:
            DataFrame with ``date`` and ``value`` columns, ascending by date
        """
        logger.info(f"Fetching observations for {series_id}")

        params = {"series_id": series_id, "sort_order": "asc"}
        if start_date is not None:
            params["observation_start"] = pd.Timestamp(start_date).strftime("%Y-%m-%d")
        if end_date is not None:
            params["observation_end"] = pd.Timestamp(end_date).strftime("%Y-%m-%d")
        if frequency:
            params["frequency"] = frequency

        data_json = self._get("series/observations", params)
        observations = data_json.get("observations", [])

        return self._process_observations(pd.DataFrame(observations), series_id)

    def get_series_info(self, series_id: str) -> dict:
        """
        Fetch metadata (title, units, frequency, last update) for a series.

        Raises:
            ValueError: If the series does not exist
        """
        data_json = self._get("series", {"series_id": series_id})

        seriess = data_json.get("seriess") or []
        if not seriess:
            raise ValueError(f"Series {series_id} not found")

        return seriess[0]

    def load_series(
        self,
        series_id: str,
        start_date=None,
        end_date=None,
        frequency: Optional[str] = None,
    ) -> FredSeries:
        """
        Fetch observations and metadata and combine them into a FredSeries.
        """
        observations = self.get_observations(series_id, start_date, end_date, frequency)
        info = self.get_series_info(series_id)

        last_updated = info.get("last_updated")
        series = FredSeries(
            series_id=info.get("id", series_id),
            units=info.get("units", ""),
            title=info.get("title", ""),
            frequency=info.get("frequency", ""),
            last_updated=pd.to_datetime(last_updated).to_pydatetime() if last_updated else None,
            notes=info.get("notes", ""),
            observations=observations,
        )

        logger.info(f"Loaded {series_id}: {len(series)} observations ({series.units})")
        return series

    def _process_observations(self, df: pd.DataFrame, series_id: str) -> pd.DataFrame:
        """
        Clean raw FRED observations.

        Missing values (FRED uses ".") are kept as NaN so gaps stay visible.

        Args:
            df: Raw DataFrame from FRED API
            series_id: FRED series identifier

        Returns:
            DataFrame with ``date`` and ``value`` columns
        """
        if df.empty or "date" not in df.columns:
            logger.warning(f"No observations returned for {series_id}")
            return empty_observations()

        df = df[["date", "value"]].copy()
        df["date"] = pd.to_datetime(df["date"], errors="coerce")
        df["value"] = pd.to_numeric(df["value"], errors="coerce")

        # Unparseable dates become NaT and are dropped
        df = df.dropna(subset=["date"])

        df = df.sort_values("date").reset_index(drop=True)

        missing = int(df["value"].isna().sum())
        logger.info(f"Processed {len(df)} observations for {series_id} ({missing} missing)")

        return df


def load_series(
    series_id: str,
    start_date=None,
    end_date=None,
    frequency: Optional[str] = None,
    api_key: Optional[str] = None,
) -> FredSeries:
    """
    Convenience function to fetch a single series.

    Args:
        series_id: FRED series identifier
        start_date: First observation date
        end_date: Last observation date
        frequency: FRED frequency code
        api_key: FRED API key, looked up from the environment if omitted

    Returns:
        FredSeries with observations and metadata
    """
    with FREDDataFetcher(api_key or load_fred_api_key()) as fetcher:
        return fetcher.load_series(series_id, start_date, end_date, frequency)


def main():
    """
    Command-line interface for fetching and summarising a series.
    """
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Fetch and summarise FRED housing data")
    parser.add_argument(
        "--series",
        type=str,
        default=DEFAULT_SERIES,
        help="FRED series ID (e.g., HOUST)"
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Observation start date (YYYY-MM-DD), defaults to 10 years ago"
    )
    parser.add_argument(
        "--end",
        type=str,
        default=None,
        help="Observation end date (YYYY-MM-DD), defaults to today"
    )
    parser.add_argument(
        "--frequency",
        choices=["m", "q", "a"],
        default="m",
        help="Data frequency: monthly, quarterly or annual"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List all available series"
    )

    args = parser.parse_args()

    if args.list:
        print("Available housing series:")
        for name, series_id in HOUSING_SERIES.items():
            print(f"  {name}: {series_id}")
        return

    end = args.end or date.today().isoformat()
    start = args.start or (pd.Timestamp(end) - pd.DateOffset(years=DEFAULT_LOOKBACK_YEARS)).strftime("%Y-%m-%d")

    try:
        series = load_series(args.series, start, end, args.frequency)
    except (requests.RequestException, ValueError) as e:
        print(f"❌ Failed to fetch {args.series}: {e}")
        sys.exit(1)

    print(f"✅ {series.title or series.series_id} ({series.units})")
    latest = series.latest()
    if latest is None:
        print("   No observations in range")
        return

    print(f"   Latest ({latest['date']:%b %Y}): {format_value(latest['value'], series.units)}")
    print(f"   Period-over-period change: {format_change(calculate_change(series, 1))}")
    yoy_periods = PERIODS_PER_YEAR[args.frequency]
    print(f"   Year-over-year change: {format_change(calculate_change(series, yoy_periods))}")
    print()
    print(create_summary_stats(series.values, series.units).to_string(index=False))


if __name__ == "__main__":
    main()
