import copy
from pathlib import Path

import pytest
import yaml

from matrix_analyzer.models import SweepRequest
from utils.config_schema import validate_config


@pytest.fixture
def base_config():
    config_path = Path(__file__).resolve().parents[1] / "configs" / "config.yaml"
    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def test_validate_config_success(base_config):
    config = validate_config(base_config)
    assert config.sweep.start_n == 100
    assert config.tracking.mlflow_enabled is False


def test_validate_config_builds_sweep_request(base_config):
    request = validate_config(base_config).sweep.to_request()
    assert request == SweepRequest(start_n=100, end_n=800, step=100, trials_per_size=3)


def test_validate_config_missing_metadata(base_config):
    config = copy.deepcopy(base_config)
    del config["metadata"]
    with pytest.raises(Exception):
        validate_config(config)


def test_validate_config_rejects_reversed_range(base_config):
    config = copy.deepcopy(base_config)
    config["sweep"]["start_n"] = 500
    config["sweep"]["end_n"] = 100
    with pytest.raises(Exception):
        validate_config(config)


@pytest.mark.parametrize("field, value", [("step", 0), ("trials_per_size", 11), ("trials_per_size", 0), ("start_n", -5)])
def test_validate_config_rejects_out_of_range_values(base_config, field, value):
    config = copy.deepcopy(base_config)
    config["sweep"][field] = value
    with pytest.raises(Exception):
        validate_config(config)


def test_validate_config_forbids_unknown_sections(base_config):
    config = copy.deepcopy(base_config)
    config["charts"] = {"enabled": True}
    with pytest.raises(Exception):
        validate_config(config)
