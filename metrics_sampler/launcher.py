"""Start the sampler service as a detached background process."""

from __future__ import annotations

import os
import subprocess
import sys

from metrics_sampler.core.config import DEFAULT_INTERVAL_MS, settings
from metrics_sampler.core.logger import get_logger

logger = get_logger("sampler.launcher")


def launch(interval_seconds: str | None = None, python: str | None = None) -> int:
    """Spawn ``python -m metrics_sampler`` detached from this process.

    The child gets its own session and no stdio, so the calling CI step can
    exit while sampling continues. Returns the child's PID.
    """
    interval = (
        interval_seconds
        or settings.metrics_interval_seconds
        or str(DEFAULT_INTERVAL_MS // 1000)
    )
    env = {**os.environ, "METRICS_INTERVAL_SECONDS": interval}
    process = subprocess.Popen(
        [python or settings.sampler_python_executable or sys.executable, "-m", "metrics_sampler"],
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
    logger.info(
        "sampler_process_started",
        extra={"pid": process.pid, "interval_seconds": interval},
    )
    return process.pid


def main() -> None:
    launch()


if __name__ == "__main__":
    main()
