from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Optional, Tuple

import numpy as np

NO_FUNCTION = "(aucune)"
DEFAULT_SAMPLES = 400

Domain = Tuple[float, float]

FUNCTIONS = MappingProxyType({
    "x^2": (lambda x: x * x, (-10.0, 10.0)),
    "sin(x)": (np.sin, (-10.0, 10.0)),
    "sin(x)+sin(3x)/3+sin(5x)/5": (
        lambda x: np.sin(x) + np.sin(3 * x) / 3 + np.sin(5 * x) / 5,
        (-10.0, 10.0),
    ),
    "x*sin(x)": (lambda x: x * np.sin(x), (-10.0, 10.0)),
})


def function_labels() -> list[str]:
    """Choices for the overlay selector, "no function" first."""
    return [NO_FUNCTION, *FUNCTIONS]


def from_label(label: Optional[str]) -> Optional[Tuple[Callable[[np.ndarray], np.ndarray], Domain]]:
    if not label:
        return None
    return FUNCTIONS.get(label)


def sample_domain(domain: Domain, n: int) -> np.ndarray:
    """max(n, 2) evenly spaced x values, both ends included."""
    a, b = domain
    return np.linspace(float(a), float(b), max(int(n), 2))


def sample_function(label: Optional[str], n: int = DEFAULT_SAMPLES) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """(xs, ys) for a registered label, None for unknown labels or "(aucune)"."""
    entry = from_label(label)
    if entry is None:
        return None
    fx, domain = entry
    xs = sample_domain(domain, n)
    return xs, np.asarray(fx(xs), dtype=float)
