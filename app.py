from pathlib import Path
import streamlit as st

from meteo_core.analysis.series_store import SeriesStore
from meteo_core.logging_setup import setup_logging

st.set_page_config(page_title="Précipitations – MeteoSuisse", page_icon="🌧️", layout="wide")


@st.cache_resource
def _init_logging():
    return setup_logging("INFO")


_init_logging()

# one store per browser session, starts with the demo series
if "series_store" not in st.session_state:
    st.session_state["series_store"] = SeriesStore.with_demo()

pages: dict[str, list] = {}

# Helper to add pages
def add(section: str, path: str, title: str, icon: str):
    if Path(path).exists():
        pages.setdefault(section, []).append(st.Page(path, title=title, icon=icon))


# Overview
add("Overview", "pages/01_Home.py", "Home", ":material/home:")
add("Overview", "pages/99_About.py", "About", ":material/info:")


# Exploration
add("Exploration", "pages/10_Precipitation_Chart.py", "Précipitations", ":material/water_drop:")
add("Exploration", "pages/11_Data_Table.py", "Data Table", ":material/table_chart:")


pg = st.navigation(pages, position="sidebar", expanded=True)
pg.run()
