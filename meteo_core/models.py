from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class TimePoint:
    timestamp: datetime
    value: Optional[float]  # None = no measurement (gap)


@dataclass(frozen=True)
class Curve:
    """A named, time-ordered slice of a series, ready for plotting."""
    name: str
    points: Tuple[TimePoint, ...]
