"""
Unit tests for configuration helpers.
"""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

from housing_dashboard.config import (
    FREQUENCIES,
    HOUSING_SERIES,
    PERIODS_PER_YEAR,
    SERIES_DESCRIPTIONS,
    load_fred_api_key,
    validate_api_key,
)


class TestValidateApiKey:

    def test_valid_key(self):
        assert validate_api_key("abcdef0123456789abcdef0123456789")

    def test_case_insensitive(self):
        assert validate_api_key("ABCDEF0123456789ABCDEF0123456789")

    @pytest.mark.parametrize("key", [
        None,
        "",
        "abc123",
        "abcdef0123456789abcdef01234567890",
        "ghijkl0123456789abcdef0123456789",
    ])
    def test_invalid_keys(self, key):
        assert not validate_api_key(key)


class TestLoadApiKey:

    def test_from_environment(self):
        with patch("housing_dashboard.config.load_dotenv"):
            with patch.dict(os.environ, {"FRED_API_KEY": "env_key"}):
                assert load_fred_api_key() == "env_key"

    def test_from_streamlit_secrets(self):
        fake_streamlit = MagicMock()
        fake_streamlit.secrets = {"FRED_API_KEY": "secret_key"}

        with patch("housing_dashboard.config.load_dotenv"):
            with patch.dict(os.environ, {}, clear=True):
                with patch.dict(sys.modules, {"streamlit": fake_streamlit}):
                    assert load_fred_api_key() == "secret_key"

    def test_missing_everywhere(self):
        fake_streamlit = MagicMock()
        fake_streamlit.secrets = {}

        with patch("housing_dashboard.config.load_dotenv"):
            with patch.dict(os.environ, {}, clear=True):
                with patch.dict(sys.modules, {"streamlit": fake_streamlit}):
                    assert load_fred_api_key() is None


class TestSeriesCatalogue:

    def test_every_series_has_description(self):
        assert set(HOUSING_SERIES.values()) == set(SERIES_DESCRIPTIONS)

    def test_frequencies_have_yearly_periods(self):
        assert set(FREQUENCIES.values()) == set(PERIODS_PER_YEAR)
