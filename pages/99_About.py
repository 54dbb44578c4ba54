import streamlit as st

st.title("About this app")

st.markdown(
    """
This app plots **precipitation** series from MeteoSuisse CSV exports.
Each imported file becomes one series named after its city; re-importing the same city replaces it.
"""
)

st.divider()

st.subheader("Quick links")
st.page_link("pages/01_Home.py", label="Home", icon=":material/home:")
st.page_link("pages/10_Precipitation_Chart.py", label="Précipitations", icon=":material/water_drop:")
st.page_link("pages/11_Data_Table.py", label="Data Table", icon=":material/table_chart:")

st.divider()

st.subheader("Import rules")
st.markdown(
    """
- Station codes: `LSN` → Lausanne, `LUG` → Lugano, `ZRH` → Zürich, `DAV`/`DVS` → Davos. Other values are used as-is.
- Status messages:
  - *Fichier chargé avec succès !* : import done.
  - *Fichier invalide...* : unknown separator or missing columns.
  - *Date invalide...* : a date cannot be shown on the chart.
  - *Erreur: ...* : anything else (e.g. unreadable file).

> Tip: If a view looks stale after changing inputs, use **Rerun** (⌘/Ctrl-R).
"""
)

st.caption("Built with Streamlit + Plotly.")
