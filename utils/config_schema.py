"""Configuration schema definitions and helpers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from matrix_analyzer.constants import MAX_TRIALS_PER_SIZE
from matrix_analyzer.models import SweepRequest


class MetadataConfig(BaseModel):
    experiment_name: str = Field(..., min_length=1, description="Name registered in MLflow")
    run_name: str = Field(..., min_length=1, description="Friendly name for the MLflow run")


class RuntimeConfig(BaseModel):
    log_dir: Optional[str] = Field(default=None, description="Resolved at runtime; path for log files")
    mlflow_uri: Optional[str] = Field(default=None, description="Resolved at runtime; MLflow tracking URI")
    mlflow_artifact_location: Optional[str] = Field(
        default=None, description="Resolved at runtime; artifact root for newly created MLflow experiments"
    )


class TrackingConfig(BaseModel):
    mlflow_enabled: bool = Field(default=True, description="If false, metrics go to a local JSONL file")
    log_level: str = Field(default="INFO", description="Loguru log level")


class SweepConfig(BaseModel):
    start_n: int = Field(default=100, ge=1)
    end_n: int = Field(default=800, ge=1)
    step: int = Field(default=100, ge=1)
    trials_per_size: int = Field(default=3, ge=1, le=MAX_TRIALS_PER_SIZE)

    @model_validator(mode="after")
    def validate_range(self) -> "SweepConfig":
        if self.end_n < self.start_n:
            raise ValueError("end_n must be greater than or equal to start_n")
        return self

    def to_request(self) -> SweepRequest:
        return SweepRequest(
            start_n=self.start_n,
            end_n=self.end_n,
            step=self.step,
            trials_per_size=self.trials_per_size,
        )


class ExportConfig(BaseModel):
    csv_name: str = Field(default="matrix_teraflops_seconds_analysis.csv", min_length=1)
    write_manifest: bool = True


class ProjectConfig(BaseModel):
    metadata: MetadataConfig
    runtime: RuntimeConfig = RuntimeConfig()
    tracking: TrackingConfig = TrackingConfig()
    sweep: SweepConfig = SweepConfig()
    export: ExportConfig = ExportConfig()

    model_config = ConfigDict(extra="forbid")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def validate_config(raw_config: Dict[str, Any]) -> ProjectConfig:
    """Validate a raw configuration dictionary and return the structured model."""
    return ProjectConfig.model_validate(raw_config)
