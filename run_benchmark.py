"""Command-line entrypoint for running a matrix multiplication sweep."""

from __future__ import annotations

import argparse
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from matrix_analyzer.measurement.sweep import SweepController
from matrix_analyzer.models import AnalysisSummary, SweepProgress
from utils.artifact_manifest import build_manifest, describe_host, write_manifest
from utils.config_schema import ProjectConfig, validate_config
from utils.export import summary_to_dict, write_csv
from utils.helpers import point_metrics, prime_cpu_sampling
from utils.local_metrics import LocalMetricsLogger
from utils.logging_setup import configure_logging
from utils.mlflow_helper import (
    end_mlflow_run,
    log_artifact_to_mlflow,
    log_metrics_to_mlflow,
    start_mlflow_run,
)
from utils.progress_tracker import ProgressTracker

DEFAULT_LOCAL_BASE = Path(os.environ.get("MATRIX_ANALYZER_BASE_DIR", "./runs"))

SWEEP_OVERRIDES = {
    "start_n": "start_n",
    "end_n": "end_n",
    "step": "step",
    "trials": "trials_per_size",
}


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark naive n x n matrix multiplication and fit a cubic model")
    parser.add_argument("--config", required=True, help="Path to YAML config file")
    parser.add_argument("--job-id", help="Unique ID used to organise output artefacts")
    parser.add_argument(
        "--base-dir",
        help="Base directory for logs/results/mlflow artefacts (defaults to env MATRIX_ANALYZER_BASE_DIR or ./runs)",
    )
    parser.add_argument("--start-n", type=int, help="Override the first matrix size")
    parser.add_argument("--end-n", type=int, help="Override the last matrix size")
    parser.add_argument("--step", type=int, help="Override the size increment")
    parser.add_argument("--trials", type=int, help="Override the number of trials per size (1-10)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from config",
    )
    return parser


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI arguments and run the benchmark; return the process exit code."""
    args = build_argument_parser().parse_args(argv)
    base_dir = Path(args.base_dir or DEFAULT_LOCAL_BASE).resolve()

    with open(args.config, "r", encoding="utf-8") as config_file:
        raw_config = yaml.safe_load(config_file) or {}
    apply_overrides(raw_config, args)

    summary = run_benchmark(raw_config, job_id=args.job_id, base_dir=base_dir)
    return 0 if summary is not None else 1


def apply_overrides(raw_config: Dict[str, Any], args: argparse.Namespace) -> None:
    sweep = raw_config.setdefault("sweep", {})
    for arg_name, key in SWEEP_OVERRIDES.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            sweep[key] = value
    if getattr(args, "log_level", None):
        raw_config.setdefault("tracking", {})["log_level"] = args.log_level


def load_config(raw_config: Dict[str, Any]) -> ProjectConfig:
    try:
        return validate_config(raw_config)
    except ValidationError as exc:
        messages = "\n".join(
            f"- {' -> '.join(str(item) for item in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        logger.error("Configuration validation failed:\n{}", messages)
        raise SystemExit(1) from exc


def _derive_job_id(job_id: Optional[str]) -> str:
    if job_id:
        return job_id
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _prepare_paths(base_dir: Path, job_id: str) -> Dict[str, Path]:
    job_dir = base_dir / "jobs" / job_id
    paths = {
        "job_dir": job_dir,
        "log_dir": job_dir / "logs",
        "results_dir": job_dir / "results",
        "result_path": job_dir / "results" / "result.json",
        "progress_path": job_dir / "progress" / "progress.json",
        "mlflow_dir": base_dir / "mlflow",
        "job_info_path": job_dir / "job_info.json",
    }

    for key, path in paths.items():
        if key.endswith("_dir"):
            path.mkdir(parents=True, exist_ok=True)
        elif key.endswith("_path"):
            path.parent.mkdir(parents=True, exist_ok=True)

    return paths


def format_report(summary: AnalysisSummary) -> str:
    """Plain-text rendition of the summary for the terminal."""
    fit = summary.fit
    lines = [
        f"Complexity:            {summary.complexity}",
        f"R^2:                   {summary.r_squared * 100:.1f}%",
        f"Fitted curve:          T(n) ~ {fit.a:.2e}*n^3 + {fit.c:.2f} ms",
        f"Last-point coefficient: {summary.theoretical_coefficient:.3e} ms/n^3",
        f"Average GFLOPS:        {summary.average_gigaflops:.4f}",
        f"Max TFLOPS:            {summary.max_teraflops:.6f}",
        f"Total TFLOPS-seconds:  {summary.total_teraflops_seconds:.6f}",
        "",
        f"{'n':>6} {'time (ms)':>12} {'std (ms)':>10} {'GFLOPS':>10} {'2n^3-n^2':>14}",
    ]
    for point in summary.points:
        lines.append(
            f"{point.n:>6} {point.average_time_ms:>12.3f} {point.standard_deviation_ms:>10.3f} "
            f"{point.gigaflops:>10.4f} {point.theoretical_operations:>14}"
        )
    return "\n".join(lines)


def run_benchmark(raw_config: Dict[str, Any], job_id: Optional[str], base_dir: Path) -> Optional[AnalysisSummary]:
    """Execute a sweep with outputs written under ``base_dir``/jobs/<job_id>."""
    job_id = _derive_job_id(job_id)
    path_info = _prepare_paths(base_dir.resolve(), job_id)

    config_model = load_config(raw_config)
    config_model.runtime.log_dir = str(path_info["log_dir"])
    config_model.runtime.mlflow_uri = f"sqlite:///{path_info['mlflow_dir'] / 'mlflow.db'}"
    config_model.runtime.mlflow_artifact_location = (path_info["mlflow_dir"] / "artifacts").as_uri()

    file_sink_id = configure_logging(config_model.tracking.log_level, config_model.runtime.log_dir, job_id)
    try:
        logger.info("Starting benchmark '{}' (job_id={})", config_model.metadata.experiment_name, job_id)
        try:
            summary = _execute(config_model, path_info)
        except Exception:
            logger.exception("Benchmark failed; closing MLflow run as FAILED")
            end_mlflow_run(status="FAILED")
            raise
        if summary is None:
            end_mlflow_run(status="FAILED")
        else:
            end_mlflow_run()
            logger.info("Benchmark complete")
        return summary
    finally:
        if file_sink_id is not None:
            logger.remove(file_sink_id)


def _execute(config_model: ProjectConfig, path_info: Dict[str, Path]) -> Optional[AnalysisSummary]:
    config = config_model.to_dict()

    run = start_mlflow_run(config)
    local_metrics = None
    if run is None:
        local_metrics = LocalMetricsLogger(str(path_info["results_dir"]))
    else:
        job_info = {"mlflow_run_id": run.info.run_id, "mlflow_uri": config_model.runtime.mlflow_uri}
        with open(path_info["job_info_path"], "w", encoding="utf-8") as job_file:
            json.dump(job_info, job_file, indent=2)

    tracker = ProgressTracker(str(path_info["progress_path"]))

    def on_progress(progress: SweepProgress) -> None:
        tracker.update(progress)
        if progress.point is None:
            logger.info("[{:5.1f}%] {}", progress.percent, progress.label)
            return
        metrics = point_metrics(progress.point)
        if local_metrics is not None:
            local_metrics.log(metrics, progress.point.n)
        else:
            log_metrics_to_mlflow(metrics, step=progress.point.n)

    prime_cpu_sampling()
    controller = SweepController(on_progress=on_progress)
    summary = controller.run(config_model.sweep.to_request())
    tracker.mark_idle()

    if summary is None:
        logger.error("Sweep produced no result: {}", controller.last_error)
        return None

    result_path = path_info["result_path"]
    with open(result_path, "w", encoding="utf-8") as result_file:
        json.dump(summary_to_dict(summary), result_file, indent=2)
    logger.info("Summary written to {}", result_path)

    csv_path = write_csv(summary.points, path_info["results_dir"] / config_model.export.csv_name)
    log_metrics_to_mlflow(
        {
            "r_squared": summary.r_squared,
            "fit_a": summary.fit.a,
            "fit_c": summary.fit.c,
            "average_gigaflops": summary.average_gigaflops,
            "max_teraflops": summary.max_teraflops,
            "total_teraflops_seconds": summary.total_teraflops_seconds,
        }
    )
    log_artifact_to_mlflow(str(result_path), artifact_path="results")
    log_artifact_to_mlflow(str(csv_path), artifact_path="results")

    if config_model.export.write_manifest:
        manifest = build_manifest(
            config,
            describe_host(),
            summary,
            exports={"result": str(result_path), "csv": str(csv_path)},
        )
        manifest_path = write_manifest(manifest, str(path_info["job_dir"]))
        logger.info("Artifact manifest written to {}", manifest_path)
        log_artifact_to_mlflow(str(manifest_path), artifact_path="artifacts")

    print(format_report(summary))
    return summary


if __name__ == "__main__":
    raise SystemExit(cli_main())
