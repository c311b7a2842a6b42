"""Single-regressor least-squares fit of timings against n^3."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from loguru import logger

from matrix_analyzer.constants import (
    APPROXIMATELY_CUBIC_THRESHOLD,
    COMPLEXITY_APPROXIMATE,
    COMPLEXITY_CUBIC,
    COMPLEXITY_INDETERMINATE,
    CUBIC_CONFIRMED_THRESHOLD,
    MIN_FIT_POINTS,
)
from matrix_analyzer.models import FitResult, MeasurementPoint


def classify_complexity(r_squared: float) -> str:
    """Map a goodness of fit onto a coarse complexity label."""
    if r_squared > CUBIC_CONFIRMED_THRESHOLD:
        return COMPLEXITY_CUBIC
    if r_squared > APPROXIMATELY_CUBIC_THRESHOLD:
        return COMPLEXITY_APPROXIMATE
    return COMPLEXITY_INDETERMINATE


def fit_cubic(points: Sequence[MeasurementPoint]) -> FitResult:
    """Fit ``time ~ a*n^3 + c`` by ordinary least squares.

    Known quirks kept on purpose:

    ``b``
        The quadratic term exists in the result but is always zero.
    ``a`` / ``c``
        Reported as absolute values, which can hide a non-physical negative fit.

    Fewer than three points yield the all-zero fit.
    """
    count = len(points)
    if count < MIN_FIT_POINTS:
        logger.debug("Only {} points; skipping cubic fit", count)
        return FitResult.zero()

    cubes = np.array([float(point.n) ** 3 for point in points])
    times = np.array([point.average_time_ms for point in points])

    sum_n3 = cubes.sum()
    sum_n6 = np.square(cubes).sum()
    sum_tn3 = (times * cubes).sum()
    sum_t = times.sum()

    denominator = count * sum_n6 - sum_n3 * sum_n3
    a = (count * sum_tn3 - sum_t * sum_n3) / denominator if denominator != 0 else 0.0
    c = sum_t / count - a * (sum_n3 / count)

    predicted = a * cubes + c
    ss_res = float(np.square(times - predicted).sum())
    ss_tot = float(np.square(times - times.mean()).sum())
    r_squared = max(0.0, 1.0 - ss_res / ss_tot) if ss_tot > 0 else 0.0

    return FitResult(
        a=abs(float(a)),
        b=0.0,
        c=abs(float(c)),
        r_squared=r_squared,
        complexity=classify_complexity(r_squared),
    )
