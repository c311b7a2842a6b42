"""Delimited-text and JSON export of sweep results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import numpy as np
from loguru import logger

from matrix_analyzer.models import AnalysisSummary, MeasurementPoint

DEFAULT_CSV_NAME = "matrix_teraflops_seconds_analysis.csv"

CSV_COLUMNS = (
    "n",
    "average_time_ms",
    "standard_deviation_ms",
    "total_flops",
    "average_flops_per_second",
    "gigaflops",
    "teraflops",
    "teraflops_seconds",
    "theoretical_operations",
)


def format_decimal(value: Union[int, float]) -> str:
    """Render a number in plain positional notation, never scientific."""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return np.format_float_positional(float(value), trim="-")


def point_row(point: MeasurementPoint) -> List[str]:
    values = [
        point.n,
        point.average_time_ms,
        point.standard_deviation_ms,
        point.total_flops,
        point.average_flops_per_second,
        point.gigaflops,
        point.teraflops,
        point.teraflops_seconds,
        point.theoretical_operations,
    ]
    return [format_decimal(value) for value in values]


def summary_to_csv_lines(points: Sequence[MeasurementPoint]) -> List[str]:
    """Header line followed by one comma-separated line per point."""
    lines = [",".join(CSV_COLUMNS)]
    lines.extend(",".join(point_row(point)) for point in points)
    return lines


def write_csv(points: Sequence[MeasurementPoint], output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(summary_to_csv_lines(points)), encoding="utf-8")
    except Exception as exc:
        logger.error("Failed to write CSV export {}: {}", path, exc)
        raise
    logger.info("Exported {} measurement rows to {}", len(points), path)
    return path


def summary_to_dict(summary: AnalysisSummary) -> Dict[str, Any]:
    """JSON-ready result document including derived per-point fields."""
    document = summary.model_dump(mode="json")
    document["complexity"] = summary.complexity
    document["r_squared"] = summary.r_squared
    return document
