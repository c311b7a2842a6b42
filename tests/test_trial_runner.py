import pytest

from conftest import FakeTimer
from matrix_analyzer.measurement.trial_runner import measure_size, trial_rates


def test_single_trial_has_zero_deviation(fake_timer):
    point = measure_size(10, 1, clock=fake_timer.clock, multiply=fake_timer.multiply)
    assert point.standard_deviation_ms == 0.0
    assert point.average_time_ms == pytest.approx(1e-9 * 1000 * 1000)


def test_aggregates_mean_and_population_std():
    times = iter([0.0, 0.001, 0.0, 0.003])

    def clock():
        return next(times)

    def multiply(a, b, n):
        return [], 2 * n ** 3

    point = measure_size(4, 2, clock=clock, multiply=multiply)
    assert point.average_time_ms == pytest.approx(2.0)
    assert point.standard_deviation_ms == pytest.approx(1.0)
    assert point.total_flops == 128
    expected_rate = (128 / 0.001 + 128 / 0.003) / 2
    assert point.average_flops_per_second == pytest.approx(expected_rate)
    assert point.gigaflops == pytest.approx(expected_rate / 1e9)
    assert point.teraflops == pytest.approx(expected_rate / 1e12)


@pytest.mark.parametrize("elapsed", [1e-6, 0.25, 3.0])
def test_teraflops_seconds_reduces_to_flops(elapsed):
    _, teraflops_seconds = trial_rates(2 * 50 ** 3, elapsed)
    assert teraflops_seconds == pytest.approx(2 * 50 ** 3 / 1e12)


def test_zero_elapsed_keeps_fields_finite():
    rate, teraflops_seconds = trial_rates(2000, 0.0)
    assert rate == 0.0
    assert teraflops_seconds == pytest.approx(2e-9)


def test_measurement_with_real_multiplier():
    point = measure_size(8, 3)
    assert point.n == 8
    assert point.total_flops == 1024
    assert point.average_time_ms >= 0
    assert point.teraflops_seconds == pytest.approx(1024 / 1e12)
    assert point.theoretical_operations == 2 * 8 ** 3 - 8 ** 2


def test_trial_failure_propagates():
    def exploding(a, b, n):
        raise MemoryError("out of memory")

    with pytest.raises(MemoryError):
        measure_size(5, 2, multiply=exploding)


def test_each_trial_multiplies_once():
    timer = FakeTimer()
    measure_size(3, 4, clock=timer.clock, multiply=timer.multiply)
    assert timer.calls == [3, 3, 3, 3]
