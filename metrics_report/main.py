"""Post-run entry point: fetch, correlate, render and publish the report."""

from __future__ import annotations

import sys
from typing import Callable, Optional

from metrics_report.client.github_jobs import (
    GitHubJobsClient,
    job_step_windows,
    select_current_job,
)
from metrics_report.client.metrics_client import fetch_with_retry, request_shutdown
from metrics_report.core.config import Settings, settings
from metrics_report.core.logger import configure_logging, get_logger
from metrics_report.correlation.steps import StepSeries, TimeWindow, correlate
from metrics_report.exceptions import MetricsFetchError, StepSourceError
from metrics_report.rendering.charts import build_render_groups
from metrics_report.rendering.renderer import ChartRenderer
from metrics_report.summary import save_snapshot, write_job_summary

from shared.schemas.metrics_series import MetricsSeries

logger = get_logger("report.main")


def load_step_windows(cfg: Settings) -> list[TimeWindow]:
    """Step windows of the current job; empty when GitHub context is missing.

    Listing failures are logged and yield no windows, the report still
    renders the whole-run charts.
    """
    if not cfg.has_github_context:
        logger.info("step_correlation_skipped", extra={"reason": "no_github_context"})
        return []
    client = GitHubJobsClient(
        token=cfg.github_token or "",
        api_url=cfg.github_api_url,
        timeout_s=cfg.metrics_fetch_timeout_seconds,
    )
    try:
        jobs = client.list_run_jobs(
            cfg.github_repository or "", cfg.github_run_id or "", cfg.github_run_attempt
        )
        job = select_current_job(jobs, job_name=cfg.github_job, runner_name=cfg.runner_name)
        if job is None:
            logger.warning(
                "current_job_not_found",
                extra={"job": cfg.github_job, "runner": cfg.runner_name, "jobs": len(jobs)},
            )
            return []
        return job_step_windows(job)
    except StepSourceError as e:
        logger.warning("step_listing_failed", extra={"error": str(e)})
        return []


def run_report(
    cfg: Settings = settings,
    fetch: Callable[..., MetricsSeries] = fetch_with_retry,
    step_windows: Callable[[Settings], list[TimeWindow]] = load_step_windows,
    renderer: Optional[ChartRenderer] = None,
) -> int:
    """Returns the process exit code.

    On failure the report is still rendered from whatever was gathered (an
    empty series if the fetch itself failed) and 1 is returned.
    """
    series = MetricsSeries.empty()
    steps: list[StepSeries] = []
    exit_code = 0
    try:
        series = fetch(
            cfg.snapshot_url,
            timeout_s=cfg.metrics_fetch_timeout_seconds,
            retries=cfg.metrics_fetch_retries,
            base_delay=cfg.metrics_fetch_base_delay_seconds,
        )
        logger.info(
            "metrics_snapshot_fetched",
            extra={
                "cpu_samples": len(series.cpu_load_percentages),
                "memory_samples": len(series.memory_usage_mbs),
            },
        )
        if cfg.metrics_snapshot_path:
            save_snapshot(series, cfg.metrics_snapshot_path)
        steps = correlate(series, step_windows(cfg))
    except Exception as e:  # noqa: BLE001 - render what we have, then fail
        logger.exception("metrics_report_failed", extra={"error": str(e)})
        exit_code = 1

    report = (renderer or ChartRenderer()).render(
        build_render_groups(series, steps), cfg.report_id
    )
    write_job_summary(report, cfg.github_step_summary)

    if cfg.metrics_stop_sampler:
        try:
            request_shutdown(cfg.shutdown_url, cfg.metrics_fetch_timeout_seconds)
        except MetricsFetchError as e:
            logger.warning("sampler_shutdown_failed", extra={"error": str(e)})
    return exit_code


def main() -> None:
    configure_logging()
    sys.exit(run_report())


if __name__ == "__main__":
    main()
