import pytest

from matrix_analyzer.analysis.cubic_fit import classify_complexity, fit_cubic
from matrix_analyzer.models import FitResult, MeasurementPoint


def make_point(n, time_ms):
    flops = 2 * n ** 3
    return MeasurementPoint(
        n=n,
        average_time_ms=time_ms,
        standard_deviation_ms=0.0,
        total_flops=flops,
        average_flops_per_second=flops / (time_ms / 1000.0) if time_ms else 0.0,
        teraflops_seconds=flops / 1e12,
    )


def test_exact_cubic_times_fit_perfectly():
    points = [make_point(n, 2e-6 * n ** 3) for n in (100, 200, 300, 400)]
    fit = fit_cubic(points)
    assert fit.r_squared == pytest.approx(1.0)
    assert fit.a == pytest.approx(2e-6)
    assert fit.c == pytest.approx(0.0, abs=1e-9)
    assert fit.b == 0.0
    assert fit.complexity == "cubic confirmed"


def test_intercept_is_recovered():
    points = [make_point(n, 1e-6 * n ** 3 + 5.0) for n in (10, 20, 30)]
    fit = fit_cubic(points)
    assert fit.a == pytest.approx(1e-6)
    assert fit.c == pytest.approx(5.0)
    assert fit.predict(20) == pytest.approx(1e-6 * 20 ** 3 + 5.0)


def test_negative_slope_is_reported_as_absolute():
    points = [make_point(n, t) for n, t in ((1, 30.0), (2, 20.0), (3, 10.0))]
    fit = fit_cubic(points)
    assert fit.a > 0
    assert fit.c > 0
    assert fit.b == 0.0


@pytest.mark.parametrize("count", [0, 1, 2])
def test_fewer_than_three_points_gives_zero_fit(count):
    points = [make_point(n, float(n)) for n in (1, 2)[:count]]
    fit = fit_cubic(points)
    assert (fit.a, fit.b, fit.c, fit.r_squared) == (0.0, 0.0, 0.0, 0.0)
    assert fit == FitResult.zero()


def test_identical_times_give_zero_r_squared():
    points = [make_point(n, 4.0) for n in (1, 2, 3)]
    fit = fit_cubic(points)
    assert fit.r_squared == 0.0
    assert fit.complexity == "indeterminate"


def test_r_squared_is_clamped_non_negative():
    points = [make_point(n, t) for n, t in ((1, 1.0), (2, 9.0), (3, 1.0), (4, 9.0), (5, 1.0))]
    fit = fit_cubic(points)
    assert 0.0 <= fit.r_squared <= 1.0


@pytest.mark.parametrize(
    "r_squared, label",
    [
        (0.95, "cubic confirmed"),
        (0.9, "approximately cubic"),
        (0.75, "approximately cubic"),
        (0.7, "indeterminate"),
        (0.0, "indeterminate"),
    ],
)
def test_complexity_thresholds(r_squared, label):
    assert classify_complexity(r_squared) == label
