"""Immutable records produced by a benchmark sweep."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from matrix_analyzer.constants import (
    COMPLEXITY_INDETERMINATE,
    GIGA,
    MAX_TRIALS_PER_SIZE,
    TERA,
    THEORETICAL_DISPLAY_SCALE,
)


class MeasurementPoint(BaseModel):
    """Aggregated timings and throughput for one matrix size."""

    model_config = ConfigDict(frozen=True)

    n: int = Field(ge=1)
    average_time_ms: float = Field(ge=0)
    standard_deviation_ms: float = Field(ge=0)
    total_flops: int = Field(ge=0)
    average_flops_per_second: float = Field(ge=0)
    teraflops_seconds: float = Field(ge=0)

    @computed_field
    @property
    def gigaflops(self) -> float:
        return self.average_flops_per_second / GIGA

    @computed_field
    @property
    def teraflops(self) -> float:
        return self.average_flops_per_second / TERA

    @computed_field
    @property
    def theoretical_operations(self) -> int:
        return 2 * self.n ** 3 - self.n ** 2

    @computed_field
    @property
    def theoretical(self) -> float:
        """Theoretical operation count scaled for plotting against milliseconds."""
        return self.theoretical_operations * THEORETICAL_DISPLAY_SCALE


class FitResult(BaseModel):
    """Least-squares fit ``time ~ a*n^3 + b*n^2 + c`` with ``b`` pinned at zero.

    ``a`` and ``c`` are stored as absolute values, so a fit with a negative
    slope or intercept is reported with its sign dropped.
    """

    model_config = ConfigDict(frozen=True)

    a: float = Field(default=0.0, ge=0)
    b: float = 0.0
    c: float = Field(default=0.0, ge=0)
    r_squared: float = Field(default=0.0, ge=0, le=1)
    complexity: str = COMPLEXITY_INDETERMINATE

    @classmethod
    def zero(cls) -> "FitResult":
        return cls()

    def predict(self, n: int) -> float:
        return self.a * n ** 3 + self.b * n ** 2 + self.c


class AnalysisSummary(BaseModel):
    """Result of one completed sweep; never published partially."""

    model_config = ConfigDict(frozen=True)

    points: Tuple[MeasurementPoint, ...] = Field(min_length=1)
    fit: FitResult
    theoretical_coefficient: float = Field(ge=0)
    average_gigaflops: float = Field(ge=0)
    max_teraflops: float = Field(ge=0)
    total_teraflops_seconds: float = Field(ge=0)

    @field_validator("points")
    @classmethod
    def validate_ordering(cls, value: Tuple[MeasurementPoint, ...]) -> Tuple[MeasurementPoint, ...]:
        sizes = [point.n for point in value]
        if any(later <= earlier for earlier, later in zip(sizes, sizes[1:])):
            raise ValueError("points must have strictly increasing n")
        return value

    @property
    def complexity(self) -> str:
        return self.fit.complexity

    @property
    def r_squared(self) -> float:
        return self.fit.r_squared


class SweepRequest(BaseModel):
    """Inputs of a sweep. Ordering and positivity are the caller's job."""

    model_config = ConfigDict(frozen=True)

    start_n: int
    end_n: int
    step: int
    trials_per_size: int = Field(default=3, ge=1, le=MAX_TRIALS_PER_SIZE)


class SweepProgress(BaseModel):
    """Observational progress event emitted by the sweep."""

    model_config = ConfigDict(frozen=True)

    percent: float = Field(ge=0, le=100)
    label: str
    completed: int = Field(ge=0)
    total: int = Field(ge=0)
    point: Optional[MeasurementPoint] = None
