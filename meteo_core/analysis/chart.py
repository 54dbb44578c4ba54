from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from meteo_core.analysis.functions import DEFAULT_SAMPLES, sample_function
from meteo_core.analysis.series_store import SeriesStore
from meteo_core.errors import DateRangeError
from meteo_core.models import Curve, TimePoint

Y_LABEL = "Précipitations en mm"
X_LABEL = "Années"
FRAME_COLUMNS = ["time", "value", "series"]

# datetime64[ns] limits, rounded inwards to whole days
_MIN_TS = datetime(1677, 9, 22)
_MAX_TS = datetime(2262, 4, 11)


def points_frame(points: Iterable[TimePoint], name: str = "") -> pd.DataFrame:
    """
    Points -> DataFrame(time, value, series). Missing values become NaN here,
    and only here (plotting gaps).
    """
    rows = list(points)
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    for p in rows:
        if not (_MIN_TS <= p.timestamp <= _MAX_TS):
            raise DateRangeError(f"{p.timestamp:%Y-%m-%d} is outside the plottable date range")

    try:
        times = pd.to_datetime([p.timestamp for p in rows])
    except pd.errors.OutOfBoundsDatetime as e:
        raise DateRangeError(str(e)) from e

    values = [np.nan if p.value is None else float(p.value) for p in rows]
    return pd.DataFrame({"time": times, "value": values, "series": name})


def curves_frame(curves: Sequence[Curve]) -> pd.DataFrame:
    """Long format (one row per point) for every curve, in curve order."""
    frames = [points_frame(c.points, c.name) for c in curves if c.points]
    if not frames:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.concat(frames, ignore_index=True)


def build_precipitation_figure(
    curves: Sequence[Curve],
    function_label: Optional[str] = None,
    n_samples: int = DEFAULT_SAMPLES,
) -> go.Figure:
    """
    One line per city (gaps where the value is missing) plus an optional
    function overlay drawn against its own numeric x axis on top.
    """
    fig = go.Figure()
    long = curves_frame(curves)

    for c in curves:
        d = long[long["series"] == c.name]
        fig.add_trace(
            go.Scatter(
                x=d["time"],
                y=d["value"],
                mode="lines+markers",
                name=c.name,
                connectgaps=False,
                marker=dict(size=4),
            )
        )

    sampled = sample_function(function_label, n_samples)
    if sampled is not None:
        xs, ys = sampled
        fig.add_trace(
            go.Scatter(x=xs, y=ys, mode="lines", name=function_label, xaxis="x2", line=dict(dash="dash"))
        )
        fig.update_layout(
            xaxis2=dict(overlaying="x", side="top", title="x", showgrid=False),
        )

    fig.update_layout(
        xaxis=dict(title=X_LABEL, type="date"),
        yaxis=dict(title=Y_LABEL),
        showlegend=True,
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        margin=dict(t=40, r=10, b=10, l=10),
    )
    return fig


def series_summary(store: SeriesStore) -> pd.DataFrame:
    """Per-series overview for the data table page."""
    rows = []
    for name in store.names():
        pts = store.get(name)
        vals = pd.Series([p.value for p in pts if p.value is not None], dtype="float64")
        rows.append(
            {
                "Série": name,
                "Points": len(pts),
                "Valeurs manquantes": sum(1 for p in pts if p.value is None),
                "Début": pts[0].timestamp if pts else None,
                "Fin": pts[-1].timestamp if pts else None,
                "Min": round(float(vals.min()), 2) if not vals.empty else None,
                "Moyenne": round(float(vals.mean()), 2) if not vals.empty else None,
                "Max": round(float(vals.max()), 2) if not vals.empty else None,
                "Total": round(float(vals.sum()), 2) if not vals.empty else None,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["Série", "Points", "Valeurs manquantes", "Début", "Fin", "Min", "Moyenne", "Max", "Total"],
    )
