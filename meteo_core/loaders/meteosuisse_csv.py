"""
Tolerant importer for MeteoSuisse-style precipitation exports.

Accepted columns (accent/case-insensitive):
    "Ville" | "Date et heure" | "Précipitations (mm)" | "Jours de précipitations"
Only the first three are read; "Ville" is optional.
"""
from __future__ import annotations

import codecs
import logging
import re
import unicodedata
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from meteo_core.errors import FormatError, GenericError
from meteo_core.models import TimePoint

logger = logging.getLogger(__name__)

# Exports are Latin-1, not UTF-8 (accented names from UTF-8 files without BOM come out mangled).
ENCODING = "latin-1"
SNIFF_CHARS = 2048
DELIMITERS = (";", ",", "\t")  # order = tie-break preference

# a byte-order mark overrides the Latin-1 default; UTF-32 before UTF-16 (same prefix)
_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

COL_CITY = "ville"
COL_DATE = "date et heure"
COL_PRECIP = "precipitations (mm)"

CITY_CODES = MappingProxyType({
    "LSN": "Lausanne",
    "LUG": "Lugano",
    "ZRH": "Zürich",
    "DAV": "Davos",
    "DVS": "Davos",
})

# (shape, format); the shape makes the field widths exact
_EXACT_DATE_FORMATS = (
    (r"\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}", "%d.%m.%Y %H:%M"),  # "01.01.1875 00:00"
    (r"\d{2}\.\d{2}\.\d{4}", "%d.%m.%Y"),
    (r"\d{4}-\d{2}-\d{2}", "%Y-%m-%d"),
    (r"\d{4}", "%Y"),
)

# fr-CH fallback: day always before month, never month-first
_FR_CH_DATE_FORMATS = (
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%Y",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
)

# datetime64[ns] limits rounded inwards; other dates count as unreadable
MIN_TIMESTAMP = pd.Timestamp(1677, 9, 22)
MAX_TIMESTAMP = pd.Timestamp(2262, 4, 11)

_FR_CH_GROUPS = "'\u2019 \u00a0\u202f"
_INVARIANT_GROUPS = ","
_NUMBER_PATTERN = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"


def decode_bytes(data: bytes) -> str:
    """Decode by byte-order mark when there is one (BOM dropped), else Latin-1."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom):].decode(encoding, errors="replace")
    return data.decode(ENCODING)


def sniff_delimiter(text: str, sample_size: int = SNIFF_CHARS) -> str:
    """Most frequent of ; , TAB in the first `sample_size` chars."""
    sample = text[:sample_size]
    counts = {d: sample.count(d) for d in DELIMITERS}
    best = max(DELIMITERS, key=lambda d: counts[d])  # max() keeps the first on ties
    if counts[best] == 0:
        raise FormatError("unknown delimiter")
    return best


def normalize_header(s: Optional[str]) -> str:
    """Trim, lower-case and strip diacritics: 'Précipitations (mm)' -> 'precipitations (mm)'."""
    if s is None or not s.strip():
        return ""
    decomposed = unicodedata.normalize("NFD", s.strip().lower())
    bare = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", bare)


def _index_of(headers: List[str], target: str) -> int:
    try:
        return headers.index(target)
    except ValueError:
        return -1


def _as_text(col: pd.Series) -> pd.Series:
    return col.fillna("").astype(str).str.strip()


def parse_dates(col: pd.Series) -> pd.Series:
    """
    Exact formats first, then the fr-CH day-first layouts (first match wins).
    NaT where nothing fits, including dates pandas cannot represent.
    """
    s = _as_text(col)
    out = None

    for shape, fmt in _EXACT_DATE_FORMATS:
        todo = s.str.fullmatch(shape) if out is None else out.isna() & s.str.fullmatch(shape)
        parsed = pd.to_datetime(s.where(todo), format=fmt, errors="coerce")
        out = parsed if out is None else out.combine_first(parsed)

    loose = s.str.split().str.join(" ")
    for fmt in _FR_CH_DATE_FORMATS:
        out = out.combine_first(pd.to_datetime(loose.where(out.isna()), format=fmt, errors="coerce"))

    return out.where((out >= MIN_TIMESTAMP) & (out <= MAX_TIMESTAMP))


def _numbers_with(s: pd.Series, decimal: str, groups: str) -> pd.Series:
    negative = s.str.startswith("(") & s.str.endswith(")")
    body = s.where(~negative, s.str[1:-1].str.strip())

    parts = body.str.partition(decimal)
    whole, sep, frac = parts[0], parts[1], parts[2]
    group_class = "[" + re.escape(groups) + "]"

    # group separators only count before the decimal separator
    bad = frac.str.contains(group_class, regex=True)
    if decimal != ".":
        bad |= body.str.contains(".", regex=False)

    text = whole.str.replace(group_class, "", regex=True) + sep.str.replace(decimal, ".", regex=False) + frac
    ok = ~bad & text.str.fullmatch(_NUMBER_PATTERN)
    v = pd.to_numeric(text.where(ok), errors="coerce").astype("float64")
    v = v.where(np.isfinite(v))
    return v.where(~negative, -v)


def parse_numbers(col: pd.Series) -> pd.Series:
    """
    Precipitation values: fr-CH (decimal comma, apostrophe/space groups) first,
    then invariant (decimal point, comma groups). Anything else -> NaN.
    """
    s = _as_text(col)
    if s.empty:
        return pd.Series(dtype="float64", index=s.index)
    return _numbers_with(s, ",", _FR_CH_GROUPS).combine_first(_numbers_with(s, ".", _INVARIANT_GROUPS))


def parse_date(s: Optional[str]) -> Optional[datetime]:
    """Single-value form of parse_dates; None if nothing fits."""
    v = parse_dates(pd.Series([s], dtype=object)).iloc[0]
    return None if pd.isna(v) else v.to_pydatetime()


def parse_number(s: Optional[str]) -> Optional[float]:
    """Single-value form of parse_numbers; None if unreadable."""
    v = parse_numbers(pd.Series([s], dtype=object)).iloc[0]
    return None if pd.isna(v) else float(v)


def guess_city_name(code_or_name: Optional[str]) -> str:
    """Known station code -> city name, anything else verbatim (trimmed)."""
    if code_or_name is None or not code_or_name.strip():
        return ""
    key = code_or_name.strip()
    return CITY_CODES.get(key.upper(), key)


def parse_series_text(text: str, fallback_name: str) -> Tuple[str, List[TimePoint]]:
    """
    Parse decoded CSV text into (series name, points sorted by time).
    Rows without a usable date are dropped; unreadable values become None.
    """
    delim = sniff_delimiter(text)
    logger.debug("Sniffed delimiter %r", delim)

    lines = [l for l in text.replace("\r\n", "\n").split("\n") if l.strip()]
    if not lines:
        raise FormatError("empty file")

    headers = [normalize_header(h) for h in lines[0].split(delim)]
    idx_city = _index_of(headers, COL_CITY)
    idx_date = _index_of(headers, COL_DATE)
    idx_prec = _index_of(headers, COL_PRECIP)
    if idx_date < 0 or idx_prec < 0:
        raise FormatError("Colonnes obligatoires manquantes (Date et/ou Précipitations).")

    rows = [l.split(delim) for l in lines[1:]]
    need = max(idx_date, idx_prec)
    kept = [parts for parts in rows if len(parts) > need]

    df = pd.DataFrame(
        {
            "raw_date": [parts[idx_date] for parts in kept],
            "raw_value": [parts[idx_prec] for parts in kept],
        },
        dtype=object,
    )
    df["time"] = parse_dates(df["raw_date"])
    no_date = df["time"].isna()
    if no_date.any():
        logger.debug("Dropping %d rows with unreadable dates, e.g. %r", int(no_date.sum()), df.loc[no_date, "raw_date"].iloc[0])
    df = df[~no_date].copy()
    df["value"] = parse_numbers(df["raw_value"])
    df = df.sort_values("time", kind="stable")

    points = [
        TimePoint(t.to_pydatetime(), None if pd.isna(v) else float(v))
        for t, v in zip(df["time"], df["value"])
    ]

    city = ""
    if idx_city >= 0:
        city = next(
            (p[idx_city].strip() for p in rows if len(p) > idx_city and p[idx_city].strip()),
            "",
        )
    name = guess_city_name(city) or fallback_name

    dropped = len(rows) - len(points)
    missing = int(df["value"].isna().sum())
    logger.info(
        "Imported series %r: %d points, %d rows dropped, %d missing values",
        name, len(points), dropped, missing,
    )
    return name, points


def load_series_bytes(data: bytes, filename: str) -> Tuple[str, List[TimePoint]]:
    """Same as load_series, for content already in memory (e.g. an upload)."""
    return parse_series_text(decode_bytes(data), Path(filename).stem)


def load_series(path: Union[str, Path]) -> Tuple[str, List[TimePoint]]:
    """Read a MeteoSuisse CSV file and return (series name, ordered points)."""
    p = Path(path)
    try:
        with open(p, "rb") as fh:
            data = fh.read()
    except OSError as e:
        raise GenericError(f"{p.name}: {e.strerror or e}") from e
    return load_series_bytes(data, p.name)
