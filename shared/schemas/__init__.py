from .metrics_series import (
    BYTES_PER_MB,
    CpuLoadPercentage,
    MalformedSnapshotError,
    MemoryUsageMB,
    MetricsSeries,
    parse_metrics_series,
    parse_metrics_series_json,
)

__all__ = [
    "BYTES_PER_MB",
    "CpuLoadPercentage",
    "MalformedSnapshotError",
    "MemoryUsageMB",
    "MetricsSeries",
    "parse_metrics_series",
    "parse_metrics_series_json",
]
