from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from meteo_core.models import TimePoint

FIRST_YEAR = 1875


def _yearly(until_year: int, base: float, period: int, offset: int, step: float) -> List[TimePoint]:
    return [
        TimePoint(datetime(y, 1, 1), float(base + (y % period - offset) * step))
        for y in range(FIRST_YEAR, until_year + 1)
    ]


def demo_series(until_year: Optional[int] = None) -> Dict[str, List[TimePoint]]:
    """
    Synthetic yearly totals (mm) for the four stations, 1875 -> until_year.
    Lets the chart show something before any CSV is imported.
    """
    y = date.today().year if until_year is None else int(until_year)
    return {
        "Lausanne": _yearly(y, 1100, 23, 11, 20),
        "Lugano": _yearly(y, 1200, 19, 9, 25),
        "Zürich": _yearly(y, 1000, 17, 8, 18),
        "Davos": _yearly(y, 900, 13, 6, 22),
    }
