"""
Streamlit Housing Market Dashboard
Interactive interface for exploring FRED housing market indicators
"""

import logging
import sys
from datetime import date
from pathlib import Path

import pandas as pd
import requests
import streamlit as st

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from housing_dashboard.charts import (
    build_data_table,
    build_excel_export,
    build_time_series_chart,
    truncate_notes,
)
from housing_dashboard.config import (
    DEFAULT_LOOKBACK_YEARS,
    DEFAULT_SERIES,
    FREQUENCIES,
    HOUSING_SERIES,
    PERIODS_PER_YEAR,
    SERIES_DESCRIPTIONS,
    TABLE_PAGE_SIZE,
    load_fred_api_key,
    validate_api_key,
)
from housing_dashboard.data_ingest import FREDDataFetcher
from housing_dashboard.formatting import format_change, format_value
from housing_dashboard.metrics import calculate_change, create_summary_stats

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="FRED Housing Market Dashboard",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: bold;
        margin-bottom: 1rem;
        color: #3c8dbc;
    }
</style>
""", unsafe_allow_html=True)

ABOUT_TEXT = """
### FRED Housing Market Dashboard

This dashboard provides access to key housing market economic indicators from the
Federal Reserve Economic Data (FRED) database.

**Features:**
- Interactive time series visualizations
- Customizable date ranges and frequencies
- Summary statistics and data information
- Downloadable data tables
- Multiple housing market indicators

**Data Source:** Federal Reserve Bank of St. Louis Economic Data (FRED) API.

**Setup:**
1. Set `FRED_API_KEY` in the environment, a `.env` file or Streamlit secrets
2. Select an economic indicator and date range
3. Click **Load Data** to fetch and visualize the data
"""


def series_name(series_id: str) -> str:
    """Display name for a FRED id from the catalogue"""
    for name, catalogue_id in HOUSING_SERIES.items():
        if catalogue_id == series_id:
            return name
    return series_id


def load_data(api_key: str, series_id: str, start: date, end: date, frequency: str) -> None:
    """Fetch a series and swap it into the session cache"""
    try:
        with st.spinner(f"Loading {series_name(series_id)}..."):
            with FREDDataFetcher(api_key) as fetcher:
                series = fetcher.load_series(series_id, start, end, frequency)
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Failed to load {series_id}: {e}")
        st.error(f"Unable to load {series_id}: {e}")
        return

    st.session_state["series"] = series
    st.session_state["frequency"] = frequency


def create_value_boxes(series, frequency: str):
    """Latest value plus period and year-over-year change tiles"""
    col1, col2, col3 = st.columns(3)

    latest = series.latest() if series is not None else None
    with col1:
        if latest is None:
            st.metric("Latest Value", "No Data")
        else:
            st.metric(
                label=f"Latest Value - {latest['date']:%b %Y}",
                value=format_value(latest["value"], series.units),
            )

    changes = [
        (col2, "Period-over-Period Change", 1),
        (col3, "Year-over-Year Change", PERIODS_PER_YEAR.get(frequency, 12)),
    ]
    for col, label, periods in changes:
        change = calculate_change(series, periods) if series is not None else None
        icon = "➖" if change is None else ("📈" if change >= 0 else "📉")
        with col:
            st.metric(label=f"{icon} {label}", value=format_change(change))


def create_series_info(series):
    """Series metadata panel"""
    if series is None:
        st.write("No series information available")
        return

    last_updated = f"{series.last_updated:%B %d, %Y}" if series.last_updated else "Unknown"
    st.markdown(f"""
**Series ID:** {series.series_id}

**Title:** {series.title}

**Units:** {series.units}

**Frequency:** {series.frequency}

**Last Updated:** {last_updated}

**Notes:** {truncate_notes(series.notes)}
""")
    description = SERIES_DESCRIPTIONS.get(series.series_id)
    if description:
        st.caption(description)


def create_dashboard_tab(series, frequency: str):
    create_value_boxes(series, frequency)

    st.markdown("---")
    name = series_name(series.series_id) if series is not None else None
    st.plotly_chart(build_time_series_chart(series, name), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("📊 Summary Statistics")
        if series is None:
            st.table(pd.DataFrame({"Statistic": ["No data loaded"], "Value": [""]}))
        else:
            st.table(create_summary_stats(series.values, series.units))
    with col2:
        st.subheader("ℹ️ Data Information")
        create_series_info(series)


def create_data_tab(series):
    st.subheader("🗂️ Raw Data")
    if series is None:
        st.info("Please load data to view table")
        return

    table = build_data_table(series)
    st.dataframe(table, use_container_width=True, hide_index=True, height=35 * (TABLE_PAGE_SIZE + 1))
    st.download_button(
        "⬇️ Download CSV",
        data=table.to_csv(index=False).encode("utf-8"),
        file_name=f"{series.series_id}.csv",
        mime="text/csv",
    )
    st.download_button(
        "⬇️ Export to Excel",
        data=build_excel_export(table, sheet_name=series.series_id),
        file_name=f"{series.series_id}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


def main():
    """Main Streamlit application"""
    st.markdown('<div class="main-header">🏠 FRED Housing Market Dashboard</div>', unsafe_allow_html=True)

    api_key = load_fred_api_key()
    api_key_loaded = validate_api_key(api_key)

    # Sidebar
    st.sidebar.title("⚙️ Data Controls")
    if api_key_loaded:
        st.sidebar.success("API Key Loaded")
    else:
        st.sidebar.error("API Key Not Found")

    names = list(HOUSING_SERIES.keys())
    selected_name = st.sidebar.selectbox(
        "Economic Indicator",
        names,
        index=list(HOUSING_SERIES.values()).index(DEFAULT_SERIES),
    )

    today = date.today()
    default_start = (pd.Timestamp(today) - pd.DateOffset(years=DEFAULT_LOOKBACK_YEARS)).date()
    date_range = st.sidebar.date_input("Date Range", value=(default_start, today))

    frequency_label = st.sidebar.selectbox("Data Frequency", list(FREQUENCIES.keys()), index=0)

    if st.sidebar.button("Load Data", type="primary", use_container_width=True, disabled=not api_key_loaded):
        if len(date_range) == 2:
            start, end = date_range
            load_data(api_key, HOUSING_SERIES[selected_name], start, end, FREQUENCIES[frequency_label])
        else:
            st.sidebar.warning("Select both a start and an end date")

    series = st.session_state.get("series")
    frequency = st.session_state.get("frequency", "m")

    dashboard_tab, data_tab, about_tab = st.tabs(["📈 Dashboard", "🗂️ Data Table", "ℹ️ About"])
    with dashboard_tab:
        create_dashboard_tab(series, frequency)
    with data_tab:
        create_data_tab(series)
    with about_tab:
        st.markdown(ABOUT_TEXT)


if __name__ == "__main__":
    main()
