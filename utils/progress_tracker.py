"""Progress file writer."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from matrix_analyzer.models import SweepProgress


class ProgressTracker:
    """Writes the latest sweep progress for external observers."""

    def __init__(self, progress_path: Optional[str]) -> None:
        self.progress_path = Path(progress_path) if progress_path else None

    def update(self, progress: SweepProgress) -> None:
        if not self.progress_path:
            return

        payload = {
            "percent": round(progress.percent, 2),
            "label": progress.label,
            "completed": progress.completed,
            "total": progress.total,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        if progress.point is not None:
            payload["last_n"] = progress.point.n
            payload["last_average_time_ms"] = progress.point.average_time_ms

        try:
            self.progress_path.parent.mkdir(parents=True, exist_ok=True)
            with self.progress_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
        except Exception as exc:
            logger.warning("Failed to write progress file {}: {}", self.progress_path, exc)

    def mark_idle(self) -> None:
        """Reset the file to the idle state once a sweep ends."""
        self.update(SweepProgress(percent=0.0, label="", completed=0, total=0))
