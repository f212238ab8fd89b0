from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

from metrics_report.core.logger import get_logger

from shared.schemas.metrics_series import MetricsSeries

logger = get_logger("report.summary")


def write_job_summary(report: str, path: Optional[str]) -> bool:
    """Append ``report`` to the job summary file, or print it when there is none."""
    if not path:
        logger.info("job_summary_path_missing")
        sys.stdout.write(report + "\n")
        return False
    with Path(path).open("a", encoding="utf-8") as fh:
        fh.write(report + "\n")
    logger.info("job_summary_written", extra={"path": path, "chars": len(report)})
    return True


def save_snapshot(series: MetricsSeries, path: str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(series.to_json_dict()), encoding="utf-8")
    logger.info(
        "metrics_snapshot_saved",
        extra={"path": str(target), "samples": len(series.cpu_load_percentages)},
    )
    return target
