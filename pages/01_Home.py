import os
import streamlit as st


st.title("Précipitations – MeteoSuisse")
st.caption("Import regional precipitation CSV exports and compare cities over time with interactive Plotly charts.")


# Primary CTA
st.divider()
st.page_link(
    "pages/10_Precipitation_Chart.py",
    label="Open the precipitation chart (import a CSV there)",
    icon=":material/water_drop:",
)
st.divider()

def safe_link(path, label, icon=""):
    if os.path.exists(path):
        st.page_link(path, label=label, icon=icon)


st.markdown(
    """
### What this app helps you do
- **Import** a MeteoSuisse CSV export (`;`, `,` or tab separated, Latin-1).
- **Compare** Lausanne, Lugano, Zürich, Davos, or any imported station, over a date range.
- **Overlay** a reference function (`x^2`, `sin(x)`, ...) on the same chart.
- **Inspect** the loaded series in a table and download them.
"""
)

with st.expander("Quick start", expanded=True):
    st.markdown(
        """
1) The app starts with **demo data** for four cities (yearly totals since 1875).
2) On **Précipitations**, upload a CSV: the city comes from the *Ville* column (codes like `ZRH` are expanded) or from the file name.
3) Narrow the **date range**, tick cities, and pick a function if you like.
4) **Réinitialiser** restores the full date range and removes the function overlay.
        """
    )

st.subheader("🔎 Exploration")
safe_link("pages/10_Precipitation_Chart.py", "Précipitations - Import, Filter & Chart", icon=":material/water_drop:")
safe_link("pages/11_Data_Table.py", "Data Table - Summary & Points", icon=":material/table_chart:")

st.divider()
safe_link("pages/99_About.py", "About", icon=":material/info:")

st.markdown(
    """
### Data & assumptions
- **Columns:** *Date et heure* and *Précipitations (mm)* are required, *Ville* is optional; *Jours de précipitations* is ignored.
- **Numbers:** French-Swiss first (`1'234,5`), then dot-decimal (`1234.5`).
- **Dates:** `dd.MM.yyyy HH:mm`, `dd.MM.yyyy`, `yyyy-MM-dd`, `yyyy`, then day-first variants (`1/2/1990`, ...).
- **Session only:** nothing is saved; a reload brings the demo data back.
"""
)
