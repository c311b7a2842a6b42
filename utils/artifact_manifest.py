"""Artifact manifest construction helpers."""

from __future__ import annotations

import json
import platform
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import psutil
from loguru import logger

from matrix_analyzer.models import AnalysisSummary


def describe_host() -> Dict[str, Any]:
    """Hardware and interpreter details that explain the measured throughput."""
    return {
        "platform": platform.platform(),
        "machine": platform.machine(),
        "processor": platform.processor(),
        "python_version": platform.python_version(),
        "cpu_count_logical": psutil.cpu_count(logical=True),
        "cpu_count_physical": psutil.cpu_count(logical=False),
        "total_memory_bytes": psutil.virtual_memory().total,
    }


def build_manifest(
    config: Dict[str, Any],
    host_metadata: Dict[str, Any],
    summary: AnalysisSummary,
    exports: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Combine configuration, host metadata, and summary scalars into a manifest."""
    manifest = {
        "manifest_version": 1,
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "metadata": config.get("metadata", {}),
        "sweep": config.get("sweep", {}),
        "host": host_metadata,
        "results": {
            "sizes": [point.n for point in summary.points],
            "complexity": summary.complexity,
            "r_squared": summary.r_squared,
            "coefficients": {"a": summary.fit.a, "b": summary.fit.b, "c": summary.fit.c},
            "theoretical_coefficient": summary.theoretical_coefficient,
            "average_gigaflops": summary.average_gigaflops,
            "max_teraflops": summary.max_teraflops,
            "total_teraflops_seconds": summary.total_teraflops_seconds,
        },
        "exports": exports or {},
    }
    return manifest


def write_manifest(manifest: Dict[str, Any], output_dir: str) -> Path:
    """Persist the manifest to disk and return the path."""
    path = Path(output_dir) / "artifact_manifest.json"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(manifest, handle, indent=2)
    except Exception as exc:
        logger.error("Failed to write artifact manifest: {}", exc)
        raise
    return path
