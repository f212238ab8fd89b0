"""HTTP client for the sampler's snapshot endpoint."""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import requests

from metrics_report.core.logger import get_logger
from metrics_report.exceptions import (
    MalformedSnapshotError,
    MetricsHTTPStatusError,
    MetricsNetworkError,
)

from shared.schemas.metrics_series import MetricsSeries, parse_metrics_series
from shared.utils.retry import retry

logger = get_logger("report.metrics_client")

DEFAULT_TIMEOUT_S = 10.0


def _request(
    method: str, url: str, timeout_s: float, session: Optional[Any]
) -> requests.Response:
    http = session if session is not None else requests
    try:
        resp = http.request(method, url, timeout=timeout_s)
    except requests.Timeout as e:
        raise MetricsNetworkError(
            f"Timed out after {timeout_s}s calling {url}", timed_out=True
        ) from e
    except requests.RequestException as e:
        raise MetricsNetworkError(f"Request to {url} failed: {e}") from e
    if not resp.ok:
        raise MetricsHTTPStatusError(resp.status_code, resp.reason or "")
    return resp


def fetch_metrics_series(
    url: str, timeout_s: float = DEFAULT_TIMEOUT_S, session: Optional[Any] = None
) -> MetricsSeries:
    """GET the snapshot and validate it.

    Raises:
        MetricsNetworkError: connection failure or timeout.
        MetricsHTTPStatusError: non-2xx response.
        MalformedSnapshotError: body is not JSON or fails schema validation.
    """
    resp = _request("GET", url, timeout_s, session)
    try:
        payload = resp.json()
    except ValueError as e:
        raise MalformedSnapshotError("Metrics response is not valid JSON") from e
    return parse_metrics_series(payload)


def fetch_with_retry(
    url: str,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    retries: int = 3,
    base_delay: float = 1.0,
    session: Optional[Any] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> MetricsSeries:
    """fetch_metrics_series, retrying network failures only."""

    def _on_retry(attempt: int, exc: BaseException, sleep_for: float) -> None:
        logger.warning(
            "metrics_fetch_retry",
            extra={
                "attempt": attempt,
                "error": str(exc),
                "sleep_for": round(sleep_for, 2),
            },
        )

    return retry(
        lambda: fetch_metrics_series(url, timeout_s, session),
        retries=retries,
        base_delay=base_delay,
        max_delay=8.0,
        jitter=0.2,
        retry_on=(MetricsNetworkError,),
        on_retry=_on_retry,
        sleep=sleep,
    )


def request_shutdown(
    url: str, timeout_s: float = DEFAULT_TIMEOUT_S, session: Optional[Any] = None
) -> None:
    """POST the sampler's shutdown route."""
    _request("POST", url, timeout_s, session)
    logger.info("sampler_shutdown_requested", extra={"url": url})
