"""Errors raised by the report step.

Network failures and HTTP status failures are distinct types so callers can
retry the former and give up on the latter.
"""

from shared.schemas.metrics_series import MalformedSnapshotError


class MetricsReportError(Exception):
    """Base class for report step failures."""


class MetricsFetchError(MetricsReportError):
    """The sampler snapshot could not be retrieved."""


class MetricsNetworkError(MetricsFetchError):
    """Connection failure or timeout while talking to the sampler."""

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class MetricsHTTPStatusError(MetricsFetchError):
    """The sampler answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"Failed to fetch metrics: {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason


class StepSourceError(MetricsReportError):
    """Workflow job steps could not be listed."""


__all__ = [
    "MalformedSnapshotError",
    "MetricsFetchError",
    "MetricsHTTPStatusError",
    "MetricsNetworkError",
    "MetricsReportError",
    "StepSourceError",
]
