from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from meteo_core.loaders.demo_series import demo_series
from meteo_core.models import Curve, TimePoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterParams:
    """Snapshot of the chart controls: inclusive time window, cities, overlay."""
    start: datetime
    end: datetime
    names: Tuple[str, ...] = ()
    function: Optional[str] = None

    @classmethod
    def from_dates(
        cls,
        date_from: date,
        date_to: date,
        names: Iterable[str],
        function: Optional[str] = None,
    ) -> "FilterParams":
        """
        Build params from date-picker values, spanning whole days.
        Reversed dates are swapped first.
        """
        if date_from > date_to:
            date_from, date_to = date_to, date_from
        return cls(
            start=datetime.combine(date_from, time.min),
            end=datetime.combine(date_to, time.max),
            names=tuple(names),
            function=function,
        )

    def bounds(self) -> Tuple[datetime, datetime]:
        if self.start > self.end:
            return self.end, self.start
        return self.start, self.end


def between(points: Iterable[TimePoint], start: datetime, end: datetime) -> List[TimePoint]:
    return [p for p in points if start <= p.timestamp <= end]


class SeriesStore:
    """
    In-memory series keyed by name (usually a city).
    Only import_series() and load_demo() change the contents.
    """

    def __init__(self) -> None:
        self._series: Dict[str, Tuple[TimePoint, ...]] = {}

    @classmethod
    def with_demo(cls, until_year: Optional[int] = None) -> "SeriesStore":
        store = cls()
        store.load_demo(until_year)
        return store

    def import_series(self, name: str, points: Iterable[TimePoint]) -> None:
        """Insert or fully replace the series `name` (last write wins)."""
        ordered = tuple(sorted(points, key=lambda p: p.timestamp))
        replaced = name in self._series
        self._series[name] = ordered
        logger.info("%s series %r (%d points)", "Replaced" if replaced else "Added", name, len(ordered))

    def load_demo(self, until_year: Optional[int] = None) -> None:
        self._series = {}
        for name, pts in demo_series(until_year).items():
            self._series[name] = tuple(pts)
        logger.info("Loaded demo data (%d series)", len(self._series))

    def names(self) -> List[str]:
        return list(self._series)

    def get(self, name: str) -> Tuple[TimePoint, ...]:
        return self._series.get(name, ())

    def __contains__(self, name: object) -> bool:
        return name in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def all_points(self) -> Iterator[TimePoint]:
        for pts in self._series.values():
            yield from pts

    def time_bounds(self) -> Optional[Tuple[datetime, datetime]]:
        """(earliest, latest) timestamp over every series; None when there are no points."""
        stamps = [p.timestamp for p in self.all_points()]
        if not stamps:
            return None
        return min(stamps), max(stamps)

    def filter(self, params: FilterParams) -> List[Curve]:
        """Selected series (store order) cut to the inclusive [start, end] window."""
        start, end = params.bounds()
        wanted = set(params.names)
        return [
            Curve(name, tuple(between(pts, start, end)))
            for name, pts in self._series.items()
            if name in wanted
        ]
