"""
Configuration settings for the housing market dashboard.
Handles both local development and Streamlit Cloud deployment.
"""

import logging
import os
import re
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# FRED API configuration
FRED_BASE_URL = "https://api.stlouisfed.org/fred"
REQUEST_TIMEOUT = 30  # seconds

# Housing market related FRED series
HOUSING_SERIES = {
    "Housing Starts": "HOUST",
    "New Home Sales": "HSN1F",
    "Existing Home Sales": "EXHOSLUSM495S",
    "Housing Permits": "PERMIT",
    "Median Home Price": "MSPUS",
    "Case-Shiller Home Price Index": "CSUSHPISA",
    "Housing Price Index (FHFA)": "USSTHPI",
    "Mortgage Rates (30-Year Fixed)": "MORTGAGE30US",
    "Mortgage Rates (15-Year Fixed)": "MORTGAGE15US",
    "Housing Inventory": "MSACSR",
    "Homeownership Rate": "RHORUSQ156N",
    "Construction Spending (Residential)": "TLRESCONS",
    "Pending Home Sales Index": "HPENDUSA",
    "Rental Vacancy Rate": "RRVRUSQ156N",
    "Home Ownership Vacancy Rate": "RHVRUSQ156N",
}

DEFAULT_SERIES = "HOUST"

# Series descriptions for reference
SERIES_DESCRIPTIONS = {
    "HOUST": "New privately-owned housing units started (thousands of units, seasonally adjusted annual rate)",
    "HSN1F": "New one family houses sold (thousands of units, seasonally adjusted annual rate)",
    "EXHOSLUSM495S": "Existing home sales (thousands of units, seasonally adjusted annual rate)",
    "PERMIT": "New privately-owned housing units authorized by building permits (thousands of units, seasonally adjusted annual rate)",
    "MSPUS": "Median sales price of houses sold (dollars, not seasonally adjusted)",
    "CSUSHPISA": "S&P/Case-Shiller U.S. National Home Price Index (index, seasonally adjusted)",
    "USSTHPI": "All-Transactions House Price Index for the United States (index, seasonally adjusted)",
    "MORTGAGE30US": "30-Year Fixed Rate Mortgage Average (percent, not seasonally adjusted)",
    "MORTGAGE15US": "15-Year Fixed Rate Mortgage Average (percent, not seasonally adjusted)",
    "MSACSR": "Monthly supply of houses (months, seasonally adjusted)",
    "RHORUSQ156N": "Homeownership rate (percent, seasonally adjusted)",
    "TLRESCONS": "Total construction spending: Residential (millions of dollars, seasonally adjusted annual rate)",
    "HPENDUSA": "Pending home sales index (index, seasonally adjusted)",
    "RRVRUSQ156N": "Rental vacancy rate (percent, seasonally adjusted)",
    "RHVRUSQ156N": "Homeowner vacancy rate (percent, seasonally adjusted)",
}

# Frequency choices offered to the user, mapped to FRED frequency codes
FREQUENCIES = {
    "Monthly": "m",
    "Quarterly": "q",
    "Annual": "a",
}

# Observations per year for each FRED frequency code, used for YoY changes
PERIODS_PER_YEAR = {
    "m": 12,
    "q": 4,
    "a": 1,
}

# Dashboard defaults
DEFAULT_LOOKBACK_YEARS = 10
NOTES_PREVIEW_CHARS = 200
TABLE_PAGE_SIZE = 25

_API_KEY_PATTERN = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)


def load_fred_api_key() -> Optional[str]:
    """
    Look up the FRED API key.

    The environment (including a local ``.env`` file) is checked first,
    then Streamlit secrets for cloud deployment.

    Returns:
        The API key, or None if it is not configured anywhere
    """
    load_dotenv()
    api_key = os.getenv("FRED_API_KEY")
    if api_key:
        return api_key

    # Try Streamlit secrets (for cloud deployment)
    try:
        import streamlit as st
        api_key = st.secrets["FRED_API_KEY"]
    except (ImportError, KeyError, FileNotFoundError):
        api_key = None

    if not api_key:
        logger.warning("FRED_API_KEY not found in environment or Streamlit secrets")
        return None

    return api_key


def validate_api_key(api_key: Optional[str]) -> bool:
    """Check that a key looks like a FRED API key (32 hex characters)."""
    if not api_key:
        return False
    return bool(_API_KEY_PATTERN.match(api_key))
