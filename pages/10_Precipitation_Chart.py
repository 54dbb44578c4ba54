import logging
from datetime import date

import streamlit as st

from meteo_core.analysis.chart import build_precipitation_figure
from meteo_core.analysis.functions import NO_FUNCTION, function_labels
from meteo_core.analysis.series_store import FilterParams, SeriesStore
from meteo_core.errors import DateRangeError, MeteoError, status_message
from meteo_core.loaders.meteosuisse_csv import load_series_bytes

logger = logging.getLogger("meteo_core.pages.precipitation")

st.title("Précipitations")
st.caption("Import a MeteoSuisse CSV, pick a date range and cities, optionally overlay a function.")

store: SeriesStore = st.session_state["series_store"]


@st.cache_data(show_spinner=False)
def parse_upload(data: bytes, filename: str):
    return load_series_bytes(data, filename)


def reset_range():
    bounds = store.time_bounds()
    if bounds is None:
        return
    st.session_state["date_from"] = bounds[0].date()
    st.session_state["date_to"] = bounds[1].date()


def on_upload():
    up = st.session_state.get("csv_upload")
    if up is None:
        return
    try:
        name, points = parse_upload(up.getvalue(), up.name)
        store.import_series(name, points)
        selected = st.session_state.get("selected_names", store.names())
        if name not in selected:
            st.session_state["selected_names"] = [*selected, name]
        st.session_state["status"] = status_message()
        reset_range()
    except MeteoError as e:
        logger.warning("Import of %s failed: %s", up.name, e)
        st.session_state["status"] = status_message(e)
    except Exception as e:
        logger.exception("Import of %s failed", up.name)
        st.session_state["status"] = status_message(e)


def on_reset():
    reset_range()
    st.session_state["function_label"] = NO_FUNCTION
    st.session_state["status"] = ""


def on_demo():
    store.load_demo()
    st.session_state["selected_names"] = store.names()
    st.session_state["status"] = ""
    reset_range()


# first visit: full range, every city
if "date_from" not in st.session_state or "date_to" not in st.session_state:
    reset_range()
st.session_state.setdefault("selected_names", store.names())
st.session_state.setdefault("function_label", NO_FUNCTION)

# CONTROLS
with st.sidebar:
    st.header("Import")
    st.file_uploader("Fichier CSV/TXT", type=["csv", "txt"], key="csv_upload", on_change=on_upload)
    status = st.session_state.get("status", "")
    if status:
        if status == status_message():
            st.success(status)
        else:
            st.error(status)

    c1, c2 = st.columns(2)
    with c1:
        st.button("Réinitialiser", on_click=on_reset, use_container_width=True)
    with c2:
        st.button("Données de démo", on_click=on_demo, use_container_width=True)

if store.time_bounds() is None:
    st.info("No data loaded yet. Import a CSV file or load the demo data.")
    st.stop()

left, mid, right = st.columns([1, 1, 2])
with left:
    d_from = st.date_input("Du", key="date_from", min_value=date(1, 1, 1), max_value=date(9999, 12, 31))
with mid:
    d_to = st.date_input("Au", key="date_to", min_value=date(1, 1, 1), max_value=date(9999, 12, 31))
with right:
    sel_names = st.multiselect("Villes", options=store.names(), key="selected_names")

fn_label = st.selectbox("Fonction", function_labels(), key="function_label")

params = FilterParams.from_dates(d_from, d_to, sel_names, fn_label)
curves = store.filter(params)

if not curves and fn_label == NO_FUNCTION:
    st.info("Pick at least one city (or a function) to draw the chart.")
    st.stop()

try:
    fig = build_precipitation_figure(curves, params.function)
except DateRangeError as e:
    logger.warning("Cannot plot: %s", e)
    st.error(status_message(e))
    st.stop()

st.plotly_chart(fig, use_container_width=True)

with st.expander("Notes"):
    st.markdown(
        """
- Files are read as **Latin-1**; separator `;`, `,` or tab is detected automatically.
- Required columns: **Date et heure**, **Précipitations (mm)**; **Ville** is optional (accents/case ignored).
- Rows with an unreadable date are skipped; unreadable values show as **gaps**.
- Importing a file for a city that is already loaded **replaces** that city's series.
- The function overlay uses its own x axis (top), sampled on [-10, 10].
        """
    )
