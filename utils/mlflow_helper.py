import mlflow
from loguru import logger

from utils.helpers import flatten_dict


def start_mlflow_run(config):
    """
    Starts an MLflow run when tracking is enabled and logs the flattened configuration.

    Parameters:
    - config: Validated configuration dictionary.

    Returns:
    - The active MLflow run, or None when tracking is disabled.
    """
    if not config.get("tracking", {}).get("mlflow_enabled", True):
        logger.warning("MLflow is disabled in the configuration.")
        return None

    runtime = config.get("runtime", {})
    mlflow_uri = runtime.get("mlflow_uri") or "sqlite:///mlflow.db"
    mlflow.set_tracking_uri(mlflow_uri)

    metadata = config.get("metadata", {})
    experiment_name = metadata.get("experiment_name", "matrix_complexity")
    if mlflow.get_experiment_by_name(experiment_name) is None:
        mlflow.create_experiment(experiment_name, artifact_location=runtime.get("mlflow_artifact_location"))
    experiment = mlflow.set_experiment(experiment_name)
    logger.info("Experiment set: {} (ID: {})", experiment_name, experiment.experiment_id)

    run = mlflow.start_run(run_name=metadata.get("run_name"))
    logger.info("MLflow run started: {}", run.info.run_id)
    mlflow.log_params(flatten_dict(config))
    return run


def log_metrics_to_mlflow(metrics, step=None):
    """
    Logs a dictionary of metrics if an MLflow run is active.

    Parameters:
    - metrics: Dictionary of metric_name: value pairs.
    - step: Step associated with the metrics (the matrix size for sweep metrics).
    """
    if mlflow.active_run():
        mlflow.log_metrics(metrics, step=step)


def log_artifact_to_mlflow(file_path, artifact_path=None):
    if mlflow.active_run():
        mlflow.log_artifact(file_path, artifact_path)


def end_mlflow_run(status="FINISHED"):
    """
    Ends the current MLflow run if one is active.
    """
    if mlflow.active_run():
        mlflow.end_run(status=status)
