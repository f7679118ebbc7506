"""
Unit tests for date sequence generation.
"""

from datetime import date

import pandas as pd
import pytest

from housing_dashboard.dates import create_date_sequence


def month_number(ts):
    return ts.year * 12 + ts.month


class TestCreateDateSequence:

    def test_monthly_inclusive_end(self):
        result = create_date_sequence("2020-01-01", "2020-03-01", "monthly")
        assert list(result) == [
            pd.Timestamp("2020-01-01"),
            pd.Timestamp("2020-02-01"),
            pd.Timestamp("2020-03-01"),
        ]

    def test_end_between_steps(self):
        result = create_date_sequence("2020-01-01", "2020-03-15", "monthly")
        assert result[-1] == pd.Timestamp("2020-03-01")
        assert len(result) == 3

    def test_monthly_clips_to_month_end(self):
        result = create_date_sequence("2020-01-31", "2020-04-30", "monthly")
        assert list(result) == [
            pd.Timestamp("2020-01-31"),
            pd.Timestamp("2020-02-29"),
            pd.Timestamp("2020-03-31"),
            pd.Timestamp("2020-04-30"),
        ]

    def test_quarterly(self):
        result = create_date_sequence("2020-01-31", "2020-12-31", "quarterly")
        assert list(result) == [
            pd.Timestamp("2020-01-31"),
            pd.Timestamp("2020-04-30"),
            pd.Timestamp("2020-07-31"),
            pd.Timestamp("2020-10-31"),
        ]

    def test_quarterly_steps_three_months(self):
        start, end = pd.Timestamp("2001-05-15"), pd.Timestamp("2024-02-01")
        result = create_date_sequence(start, end, "quarterly")

        assert result[0] == start
        assert result[-1] <= end
        steps = [month_number(b) - month_number(a) for a, b in zip(result[:-1], result[1:])]
        assert set(steps) == {3}
        assert all(ts.day == 15 for ts in result)

    def test_annual_leap_day(self):
        result = create_date_sequence(date(2020, 2, 29), date(2024, 3, 1), "annual")
        assert list(result) == [
            pd.Timestamp("2020-02-29"),
            pd.Timestamp("2021-02-28"),
            pd.Timestamp("2022-02-28"),
            pd.Timestamp("2023-02-28"),
            pd.Timestamp("2024-02-29"),
        ]

    @pytest.mark.parametrize("code, months", [("m", 1), ("q", 3), ("a", 12)])
    def test_fred_codes(self, code, months):
        result = create_date_sequence("2020-01-01", "2022-01-01", code)
        assert month_number(result[1]) - month_number(result[0]) == months

    def test_unknown_frequency_defaults_to_monthly(self):
        expected = create_date_sequence("2020-01-01", "2020-06-01", "monthly")
        result = create_date_sequence("2020-01-01", "2020-06-01", "weekly")
        assert result.equals(expected)

    def test_single_date(self):
        result = create_date_sequence("2020-01-01", "2020-01-01")
        assert list(result) == [pd.Timestamp("2020-01-01")]

    def test_end_before_start(self):
        result = create_date_sequence("2020-02-01", "2020-01-01")
        assert isinstance(result, pd.DatetimeIndex)
        assert len(result) == 0
