"""Aggregate throughput statistics over a finished sweep."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from matrix_analyzer.models import AnalysisSummary, FitResult, MeasurementPoint


def theoretical_coefficient(points: Sequence[MeasurementPoint]) -> float:
    """Time per n^3 at the largest size, or 0 with a single point."""
    if len(points) <= 1:
        return 0.0
    last = points[-1]
    return last.average_time_ms / float(last.n) ** 3


def build_summary(points: Sequence[MeasurementPoint], fit: FitResult) -> AnalysisSummary:
    if not points:
        raise ValueError("Cannot summarise a sweep without measurements.")

    return AnalysisSummary(
        points=tuple(points),
        fit=fit,
        theoretical_coefficient=theoretical_coefficient(points),
        average_gigaflops=float(np.mean([point.gigaflops for point in points])),
        max_teraflops=max(point.teraflops for point in points),
        total_teraflops_seconds=float(sum(point.teraflops_seconds for point in points)),
    )
