import html
import logging
from contextlib import contextmanager
from typing import List, Optional

import altair as alt
import streamlit as st

from fuel_core.aggregation import chart_frame, monthly_average_for, select_records
from fuel_core.charts import chart_title, monthly_bar_chart
from fuel_core.config import get_settings
from fuel_core.data import LoadState, dataset_summary, load_state, records_frame
from fuel_core.filters import Selection, default_selection, extract_filter_options, normalize_selection

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
alt.data_transformers.disable_max_rows()


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{html.escape(title)}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_summary_chips(record_count: int, city_count: int, year_count: int) -> str:
    chips: List[str] = [
        f"{record_count:,} records loaded",
        f"{city_count} cities",
        f"{year_count} years",
    ]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def _index_of(options: list, value: object) -> Optional[int]:
    try:
        return options.index(value)
    except ValueError:
        return 0 if options else None


# ---------- UI setup ----------
st.set_page_config(page_title="Fuel Price Analytics Dashboard", layout="wide")
inject_base_styles()
st.title("Fuel Price Analytics Dashboard")
st.caption("Data Source: National Data and Analytics Platform, NITI Aayog")

def render_load_state(placeholder, state: LoadState) -> bool:
    """Render loading / error / empty states into the placeholder; True when data is ready."""
    with placeholder.container():
        if state.loading:
            st.info("Loading fuel price data... Please wait while we load and process the dataset.")
            return False
        if state.error:
            st.error(f"Error loading data: {state.error}")
            st.markdown(
                f"- CSV file is located at: `{get_settings().csv_path}` (override with `FUEL_PRICES_CSV`)\n"
                "- CSV file has the correct format with required columns"
            )
            return False
        if not state.data_ready:
            st.error("No valid fuel price records found in the dataset.")
            return False
    placeholder.empty()
    return True


status = st.empty()
render_load_state(status, LoadState(loading=True))
with st.spinner("Loading fuel price data..."):
    state = load_state()
if not render_load_state(status, state):
    st.stop()

records = state.records
options = extract_filter_options(records)
defaults = default_selection(options)
summary = dataset_summary(records)
st.markdown(
    f"<div class='chip-row'>{format_summary_chips(**summary)}</div>",
    unsafe_allow_html=True,
)

# ----- Filters -----
c1, c2, c3 = st.columns(3)
city = c1.selectbox("Metro City", options=options.cities, index=_index_of(options.cities, defaults.city))
fuel_type = c2.selectbox("Fuel Type", options=options.fuel_types, index=_index_of(options.fuel_types, defaults.fuel_type))
year = c3.selectbox("Year", options=options.years, index=_index_of(options.years, defaults.year))

selection: Selection = normalize_selection({"city": city, "fuel_type": fuel_type, "year": year}, options=options)
points = monthly_average_for(records, selection)

with card(chart_title(selection)):
    if not points:
        st.info(
            f"No data available for {selection.fuel_type} in {selection.city} ({selection.year}). "
            "Try a different combination of filters."
        )
    else:
        st.altair_chart(monthly_bar_chart(points, selection), use_container_width=True)
        export_df = chart_frame(points)
        records_df = records_frame(select_records(records, selection.city, selection.fuel_type, selection.year))
        b1, b2 = st.columns(2)
        b1.download_button(
            "Export CSV",
            data=export_df.to_csv(index=False).encode("utf-8"),
            file_name="monthly-average.csv",
            mime="text/csv",
        )
        b2.download_button(
            "Export records CSV",
            data=records_df.to_csv(index=False).encode("utf-8"),
            file_name="records.csv",
            mime="text/csv",
        )
