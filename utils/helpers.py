from typing import Any, Dict

import psutil

from matrix_analyzer.models import MeasurementPoint


def flatten_dict(d, parent_key='', sep='.'):
    """
    Flattens a nested dictionary into a single dictionary with dot-separated keys.

    Parameters:
    - d: Dictionary to flatten.
    - parent_key: Key prefix for recursion (internal use).
    - sep: Separator for nested keys.

    Returns:
    - A flattened dictionary.
    """
    flat = {}
    for key, value in d.items():
        new_key = f"{parent_key}{sep}{key}" if parent_key else key
        if isinstance(value, dict):
            flat.update(flatten_dict(value, new_key, sep=sep))
        else:
            flat[new_key] = value
    return flat


def prime_cpu_sampling() -> None:
    """
    Starts psutil's CPU measurement window; the first non-blocking sample is always 0.0.
    """
    psutil.cpu_percent(interval=None)


def point_metrics(point: MeasurementPoint, include_system: bool = True) -> Dict[str, float]:
    """
    Builds the per-size metrics logged to MLflow or the local JSONL file.

    Parameters:
    - point: Measurement for one matrix size.
    - include_system: Adds current CPU and RAM utilisation when True.
    """
    metrics: Dict[str, Any] = {
        "average_time_ms": point.average_time_ms,
        "standard_deviation_ms": point.standard_deviation_ms,
        "total_flops": float(point.total_flops),
        "average_flops_per_second": point.average_flops_per_second,
        "gigaflops": point.gigaflops,
        "teraflops": point.teraflops,
        "teraflops_seconds": point.teraflops_seconds,
    }
    if include_system:
        metrics["CPU_Usage"] = psutil.cpu_percent(interval=None)
        metrics["RAM_Usage"] = psutil.virtual_memory().percent
    return metrics
