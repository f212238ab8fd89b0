"""Workflow job steps from the GitHub Actions REST API."""

from __future__ import annotations

from typing import Any, Optional

import requests

from metrics_report.core.logger import get_logger
from metrics_report.correlation.steps import TimeWindow
from metrics_report.exceptions import StepSourceError

logger = get_logger("report.github_jobs")

JOBS_PATH = "/repos/{repository}/actions/runs/{run_id}/attempts/{attempt}/jobs"
PER_PAGE = 100


class GitHubJobsClient:
    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout_s: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def list_run_jobs(
        self, repository: str, run_id: str, attempt: str = "1"
    ) -> list[dict[str, Any]]:
        """All jobs of one run attempt, following pages until a short one."""
        url = self.api_url + JOBS_PATH.format(
            repository=repository, run_id=run_id, attempt=attempt
        )
        jobs: list[dict[str, Any]] = []
        page = 1
        while True:
            params = {"per_page": PER_PAGE, "page": page}
            try:
                resp = self.session.get(
                    url, headers=self.headers, params=params, timeout=self.timeout_s
                )
            except requests.RequestException as e:
                raise StepSourceError(f"Listing jobs failed: {e}") from e
            if not resp.ok:
                raise StepSourceError(
                    f"Listing jobs failed: {resp.status_code} {resp.reason}"
                )
            try:
                chunk = resp.json().get("jobs") or []
            except ValueError as e:
                raise StepSourceError("Listing jobs returned a non-JSON body") from e
            jobs.extend(chunk)
            if len(chunk) < PER_PAGE:
                break
            page += 1
        logger.info(
            "workflow_jobs_listed",
            extra={"run_id": run_id, "jobs": len(jobs), "pages": page},
        )
        return jobs


def select_current_job(
    jobs: list[dict[str, Any]],
    job_name: Optional[str] = None,
    runner_name: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """The job this step runs in: by runner name first, then by job name."""
    if runner_name:
        for job in jobs:
            if job.get("runner_name") == runner_name and job.get("status") == "in_progress":
                return job
    if job_name:
        named = [job for job in jobs if job.get("name") == job_name]
        for job in named:
            if job.get("status") == "in_progress":
                return job
        if named:
            return named[0]
    return None


def job_step_windows(job: dict[str, Any]) -> list[TimeWindow]:
    windows = []
    for i, step in enumerate(job.get("steps") or []):
        name = step.get("name", f"step {i + 1}")
        try:
            windows.append(
                TimeWindow.from_iso(name, step.get("started_at"), step.get("completed_at"))
            )
        except ValueError as e:
            raise StepSourceError(f"Step {name!r} has a malformed timestamp: {e}") from e
    return windows
