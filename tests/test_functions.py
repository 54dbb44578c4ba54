import numpy as np

from meteo_core.analysis.functions import (
    DEFAULT_SAMPLES,
    FUNCTIONS,
    NO_FUNCTION,
    function_labels,
    sample_domain,
    sample_function,
)


def test_square_three_samples():
    xs, ys = sample_function("x^2", n=3)
    assert np.allclose(xs, [-10.0, 0.0, 10.0])
    assert np.allclose(ys, [100.0, 0.0, 100.0])


def test_at_least_two_samples():
    xs = sample_domain((-10, 10), 1)
    assert np.allclose(xs, [-10.0, 10.0])
    xs, ys = sample_function("sin(x)", n=0)
    assert len(xs) == len(ys) == 2


def test_default_sample_count_and_endpoints():
    xs, ys = sample_function("x*sin(x)")
    assert len(xs) == DEFAULT_SAMPLES
    assert xs[0] == -10.0 and xs[-1] == 10.0
    assert np.allclose(ys, xs * np.sin(xs))


def test_square_wave_sum():
    xs, ys = sample_function("sin(x)+sin(3x)/3+sin(5x)/5", n=50)
    expected = np.sin(xs) + np.sin(3 * xs) / 3 + np.sin(5 * xs) / 5
    assert np.allclose(ys, expected)


def test_unknown_or_none_label_gives_no_curve():
    assert sample_function("cos(x)") is None
    assert sample_function(NO_FUNCTION) is None
    assert sample_function(None) is None
    assert sample_function("") is None


def test_labels_start_with_no_function():
    labels = function_labels()
    assert labels[0] == NO_FUNCTION
    assert labels[1:] == list(FUNCTIONS)
    assert len(FUNCTIONS) == 4
