import streamlit as st

from meteo_core.analysis.chart import points_frame, series_summary
from meteo_core.analysis.series_store import SeriesStore
from meteo_core.errors import DateRangeError, status_message

st.title("Data Table")
st.caption("Overview of every series currently loaded in this session.")

store: SeriesStore = st.session_state["series_store"]

if len(store) == 0:
    st.info("No series loaded.")
    st.stop()

st.subheader("Summary")
st.dataframe(series_summary(store), use_container_width=True, hide_index=True)

st.subheader("Points")
name = st.selectbox("Série", store.names())
try:
    df = points_frame(store.get(name), name).drop(columns=["series"])
except DateRangeError as e:
    st.error(status_message(e))
    st.stop()
df = df.rename(columns={"time": "Date et heure", "value": "Précipitations (mm)"})
st.dataframe(df, use_container_width=True, hide_index=True)

st.download_button(
    "Download CSV",
    df.to_csv(index=False, sep=";").encode("latin-1", errors="replace"),
    file_name=f"{name}.csv",
    mime="text/csv",
)
