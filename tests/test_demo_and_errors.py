import logging
from datetime import datetime

import pytest

from meteo_core.errors import (
    STATUS_DATE,
    STATUS_FORMAT,
    STATUS_OK,
    DateRangeError,
    FormatError,
    GenericError,
    status_message,
)
from meteo_core.loaders.demo_series import demo_series
from meteo_core.logging_setup import setup_logging


def test_demo_series_formulas():
    demo = demo_series(until_year=1880)

    assert list(demo) == ["Lausanne", "Lugano", "Zürich", "Davos"]
    assert all(len(pts) == 6 for pts in demo.values())

    first = demo["Lausanne"][0]
    assert first.timestamp == datetime(1875, 1, 1)
    assert first.value == 1100 + (1875 % 23 - 11) * 20  # 1120
    assert demo["Lugano"][0].value == 1200 + (1875 % 19 - 9) * 25
    assert demo["Zürich"][-1].value == 1000 + (1880 % 17 - 8) * 18
    assert demo["Davos"][-1].timestamp == datetime(1880, 1, 1)


def test_demo_series_defaults_to_current_year():
    last = demo_series()["Davos"][-1].timestamp
    assert last.year == datetime.now().year


@pytest.mark.parametrize(
    "exc, expected",
    [
        (None, STATUS_OK),
        (FormatError("unknown delimiter"), STATUS_FORMAT),
        (DateRangeError("year 1500"), STATUS_DATE),
        (GenericError("boom"), "Erreur: boom"),
        (FileNotFoundError("nope.csv"), "Erreur: nope.csv"),
    ],
)
def test_status_message(exc, expected):
    assert status_message(exc) == expected


def test_error_taxonomy():
    assert issubclass(FormatError, ValueError)
    assert issubclass(DateRangeError, ValueError)
    assert not issubclass(GenericError, ValueError)


def test_setup_logging_configures_package_logger():
    logger = setup_logging("DEBUG")
    assert logger.name == "meteo_core"
    assert logger.level == logging.DEBUG
    assert logger.handlers
    assert logging.getLogger("meteo_core.loaders.meteosuisse_csv").getEffectiveLevel() == logging.DEBUG
