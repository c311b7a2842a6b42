"""Repeated timing of one matrix size."""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

import numpy as np
from loguru import logger

from matrix_analyzer.constants import TERA
from matrix_analyzer.matrix.generator import Matrix, generate_random_matrix
from matrix_analyzer.matrix.multiply import multiply_with_flops
from matrix_analyzer.models import MeasurementPoint

Clock = Callable[[], float]
Multiplier = Callable[[Matrix, Matrix, int], Tuple[Matrix, int]]


def trial_rates(total_flops: int, elapsed_seconds: float) -> Tuple[float, float]:
    """Return ``(flops_per_second, teraflops_seconds)`` for a single trial.

    Teraflops-seconds is elapsed time multiplied by the achieved teraflops
    rate, which reduces to ``total_flops / 1e12``. A zero elapsed time reports
    a zero rate and keeps that limit value for the work metric.
    """
    if elapsed_seconds <= 0:
        return 0.0, total_flops / TERA
    flops_per_second = total_flops / elapsed_seconds
    teraflops_per_second = flops_per_second / TERA
    return flops_per_second, elapsed_seconds * teraflops_per_second


def measure_size(
    n: int,
    trials: int,
    *,
    clock: Clock = time.perf_counter,
    rng: Optional[np.random.Generator] = None,
    multiply: Multiplier = multiply_with_flops,
) -> MeasurementPoint:
    """Time ``trials`` multiplications of fresh random ``n`` x ``n`` matrices.

    Each trial draws new operands, so matrix generation is never part of the
    timed region. Failures propagate; there are no retries.
    """
    times_ms: List[float] = []
    rates: List[float] = []
    work: List[float] = []
    total_flops = 0

    for trial in range(trials):
        matrix_a = generate_random_matrix(n, rng)
        matrix_b = generate_random_matrix(n, rng)

        start = clock()
        _, flops = multiply(matrix_a, matrix_b, n)
        elapsed_seconds = clock() - start

        flops_per_second, teraflops_seconds = trial_rates(flops, elapsed_seconds)
        times_ms.append(elapsed_seconds * 1000.0)
        rates.append(flops_per_second)
        work.append(teraflops_seconds)
        total_flops = flops
        logger.debug(
            "n={} trial {}/{}: {:.3f} ms, {:.3e} FLOPS",
            n,
            trial + 1,
            trials,
            times_ms[-1],
            flops_per_second,
        )

    timings = np.asarray(times_ms, dtype=float)
    return MeasurementPoint(
        n=n,
        average_time_ms=float(timings.mean()),
        standard_deviation_ms=float(timings.std(ddof=0)),
        total_flops=total_flops,
        average_flops_per_second=float(np.mean(rates)),
        teraflops_seconds=float(np.mean(work)),
    )
