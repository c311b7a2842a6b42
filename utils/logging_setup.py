"""Loguru sink configuration for benchmark runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def configure_logging(level: str, log_dir: Optional[str], run_name: str) -> Optional[int]:
    """Route logs to stdout and, when ``log_dir`` is set, a rotating run file.

    Returns the id of the file sink so the caller can detach it when the run ends.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stdout, level=level)

    log_file = None
    file_sink_id = None
    if log_dir:
        log_file = Path(log_dir) / f"{run_name}.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_sink_id = logger.add(str(log_file), level=level, rotation="100 MB")

    logger.debug("Logging configured with level={} at {}", level, log_file)
    return file_sink_id
