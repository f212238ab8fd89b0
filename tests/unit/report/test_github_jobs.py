from unittest.mock import MagicMock

import pytest
import requests

from metrics_report.client.github_jobs import (
    PER_PAGE,
    GitHubJobsClient,
    job_step_windows,
    select_current_job,
)
from metrics_report.exceptions import StepSourceError


def _page(jobs, status=200):
    resp = MagicMock()
    resp.ok = status < 400
    resp.status_code = status
    resp.reason = "Forbidden" if status == 403 else "OK"
    resp.json.return_value = {"jobs": jobs}
    return resp


def _client(*pages):
    session = MagicMock()
    session.get.side_effect = list(pages)
    return GitHubJobsClient(token="t0ken", session=session), session


class TestListRunJobs:
    def test_follows_pages_until_short_page(self):
        first = [{"id": i} for i in range(PER_PAGE)]
        client, session = _client(_page(first), _page([{"id": "last"}]))

        jobs = client.list_run_jobs("octo/repo", "42", "2")

        assert len(jobs) == PER_PAGE + 1
        assert session.get.call_count == 2
        url = session.get.call_args.args[0]
        assert url == "https://api.github.com/repos/octo/repo/actions/runs/42/attempts/2/jobs"
        kwargs = session.get.call_args.kwargs
        assert kwargs["params"] == {"per_page": PER_PAGE, "page": 2}
        assert kwargs["headers"]["Authorization"] == "Bearer t0ken"
        assert kwargs["timeout"] == 10.0

    def test_single_page(self):
        client, session = _client(_page([{"id": 1}]))

        assert client.list_run_jobs("octo/repo", "42") == [{"id": 1}]
        assert session.get.call_count == 1

    def test_error_status(self):
        client, _ = _client(_page([], status=403))

        with pytest.raises(StepSourceError, match="403"):
            client.list_run_jobs("octo/repo", "42")

    def test_network_failure(self):
        client, _ = _client(requests.ConnectionError("no route"))

        with pytest.raises(StepSourceError):
            client.list_run_jobs("octo/repo", "42")


class TestSelectCurrentJob:
    JOBS = [
        {"name": "lint", "status": "completed", "runner_name": "runner-1"},
        {"name": "test", "status": "completed", "runner_name": "runner-2"},
        {"name": "test", "status": "in_progress", "runner_name": "runner-3"},
    ]

    def test_by_runner(self):
        job = select_current_job(self.JOBS, job_name="lint", runner_name="runner-3")

        assert job is self.JOBS[2]

    def test_by_name_prefers_in_progress(self):
        assert select_current_job(self.JOBS, job_name="test") is self.JOBS[2]

    def test_by_name_falls_back_to_first_match(self):
        assert select_current_job(self.JOBS, job_name="lint") is self.JOBS[0]

    def test_no_match(self):
        assert select_current_job(self.JOBS, job_name="deploy", runner_name="x") is None
        assert select_current_job(self.JOBS) is None


def test_job_step_windows():
    job = {
        "steps": [
            {
                "name": "Checkout",
                "started_at": "2024-01-01T00:00:00Z",
                "completed_at": "2024-01-01T00:00:04Z",
            },
            {"name": "Build", "started_at": "2024-01-01T00:00:05Z", "completed_at": None},
            {"name": "Upload", "started_at": None, "completed_at": None},
        ]
    }

    windows = job_step_windows(job)

    assert [w.name for w in windows] == ["Checkout", "Build", "Upload"]
    assert windows[0].start_inclusive_ms == 1704067200000
    assert windows[0].end_inclusive_ms == 1704067204000
    assert windows[1].end_inclusive_ms is None
    assert windows[2].unbounded


def test_job_without_steps():
    assert job_step_windows({"name": "queued"}) == []


def test_non_json_body():
    resp = _page([])
    resp.json.side_effect = ValueError("Expecting value")
    client, _ = _client(resp)

    with pytest.raises(StepSourceError, match="non-JSON"):
        client.list_run_jobs("octo/repo", "42")


def test_malformed_step_timestamp():
    job = {"steps": [{"name": "Build", "started_at": "not-a-date", "completed_at": None}]}

    with pytest.raises(StepSourceError, match="Build"):
        job_step_windows(job)
