"""Sequential sweep over matrix sizes followed by the cubic fit."""

from __future__ import annotations

from typing import Callable, List, Optional

from loguru import logger

from matrix_analyzer.analysis.cubic_fit import fit_cubic
from matrix_analyzer.analysis.summary import build_summary
from matrix_analyzer.measurement.trial_runner import measure_size
from matrix_analyzer.models import AnalysisSummary, MeasurementPoint, SweepProgress, SweepRequest

ProgressCallback = Callable[[SweepProgress], None]
StopCheck = Callable[[], bool]
Measure = Callable[[int, int], MeasurementPoint]


class SweepCancelled(RuntimeError):
    """Raised when a cooperative stop request is seen between sizes."""


def iter_sizes(start_n: int, end_n: int, step: int) -> range:
    """Sizes ``start_n, start_n + step, ...`` up to and including ``end_n``."""
    return range(start_n, end_n + 1, step)


def progress_percent(n: int, start_n: int, end_n: int) -> float:
    """Fraction of the size range covered once ``n`` is measured, in [0, 100]."""
    if end_n == start_n:
        return 100.0
    percent = (n - start_n) / (end_n - start_n) * 100.0
    return min(max(percent, 0.0), 100.0)


def size_label(n: int, trials: int) -> str:
    noun = "trial" if trials == 1 else "trials"
    return f"Measuring {n}x{n} matrices ({trials} {noun})"


def run_sweep(
    request: SweepRequest,
    *,
    on_progress: Optional[ProgressCallback] = None,
    should_stop: Optional[StopCheck] = None,
    measure: Measure = measure_size,
) -> AnalysisSummary:
    """Measure every size in the request and return the finished summary.

    ``on_progress`` receives a "started" event carrying the label of the size
    about to be measured and a "measured" event carrying the new percentage
    and the point. The second call is the scheduling point between sizes.
    ``should_stop`` is polled at the top of each size. Any failure propagates.
    """
    sizes = iter_sizes(request.start_n, request.end_n, request.step)
    total = len(sizes)
    points: List[MeasurementPoint] = []
    percent = 0.0

    logger.info(
        "Starting sweep n={}..{} step {} with {} trial(s) per size ({} sizes)",
        request.start_n,
        request.end_n,
        request.step,
        request.trials_per_size,
        total,
    )

    for index, n in enumerate(sizes):
        if should_stop is not None and should_stop():
            raise SweepCancelled(f"Sweep cancelled before n={n} ({index}/{total} sizes measured)")

        label = size_label(n, request.trials_per_size)
        if on_progress is not None:
            on_progress(SweepProgress(percent=percent, label=label, completed=index, total=total))

        point = measure(n, request.trials_per_size)
        points.append(point)
        percent = progress_percent(n, request.start_n, request.end_n)
        logger.debug("n={} measured: {:.3f} ms avg, {:.4f} GFLOPS", n, point.average_time_ms, point.gigaflops)

        if on_progress is not None:
            on_progress(
                SweepProgress(percent=percent, label=label, completed=index + 1, total=total, point=point)
            )

    fit = fit_cubic(points)
    return build_summary(points, fit)


class SweepController:
    """Runs sweeps one at a time and publishes only completed summaries."""

    def __init__(
        self,
        on_progress: Optional[ProgressCallback] = None,
        measure: Measure = measure_size,
    ) -> None:
        self._on_progress = on_progress
        self._measure = measure
        self._running = False
        self._cancel_requested = False
        self.summary: Optional[AnalysisSummary] = None
        self.last_error: Optional[Exception] = None
        self.percent_complete = 0.0
        self.current_label = ""

    @property
    def is_running(self) -> bool:
        return self._running

    def cancel(self) -> None:
        """Ask the active sweep to stop before its next size."""
        if self._running:
            self._cancel_requested = True

    def clear(self) -> None:
        """Discard the published summary and reset the progress side-channel."""
        self.summary = None
        self.last_error = None
        self._reset_progress()

    def run(self, request: SweepRequest) -> Optional[AnalysisSummary]:
        """Run a sweep; return None if rejected, cancelled or failed."""
        if self._running:
            logger.warning("A sweep is already running; ignoring request for n={}..{}", request.start_n, request.end_n)
            return None

        self._running = True
        self._cancel_requested = False
        self.summary = None
        self.last_error = None
        self._reset_progress()

        try:
            summary = run_sweep(
                request,
                on_progress=self._handle_progress,
                should_stop=lambda: self._cancel_requested,
                measure=self._measure,
            )
        except SweepCancelled as exc:
            logger.warning("{}", exc)
            self.last_error = exc
            return None
        except Exception as exc:
            logger.exception("Sweep aborted: {}", exc)
            self.last_error = exc
            return None
        finally:
            self._running = False
            self._cancel_requested = False
            self._reset_progress()

        self.summary = summary
        logger.info(
            "Sweep complete: {} sizes, R^2={:.4f} ({})",
            len(summary.points),
            summary.r_squared,
            summary.complexity,
        )
        return summary

    def _handle_progress(self, progress: SweepProgress) -> None:
        self.percent_complete = progress.percent
        self.current_label = progress.label
        if self._on_progress is not None:
            self._on_progress(progress)

    def _reset_progress(self) -> None:
        self.percent_complete = 0.0
        self.current_label = ""
