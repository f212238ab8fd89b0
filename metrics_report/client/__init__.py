from .github_jobs import GitHubJobsClient, job_step_windows, select_current_job
from .metrics_client import fetch_metrics_series, fetch_with_retry, request_shutdown

__all__ = [
    "GitHubJobsClient",
    "fetch_metrics_series",
    "fetch_with_retry",
    "job_step_windows",
    "request_shutdown",
    "select_current_job",
]
