import os

# Must be set before any Settings() instance is created at import time.
os.environ.setdefault("APP_ENVIRONMENT", "testing")

import pytest  # noqa: E402

from shared.schemas.metrics_series import (  # noqa: E402
    CpuLoadPercentage,
    MemoryUsageMB,
    MetricsSeries,
)

T0 = 1704067200000  # 2024-01-01T00:00:00Z


@pytest.fixture
def sample_series() -> MetricsSeries:
    """Two samples five seconds apart."""
    return MetricsSeries(
        cpu_load_percentages=(
            CpuLoadPercentage(unix_time_ms=T0, user=25.5, system=10.3),
            CpuLoadPercentage(unix_time_ms=T0 + 5000, user=30.2, system=12.1),
        ),
        memory_usage_mbs=(
            MemoryUsageMB(unix_time_ms=T0, used=4096, free=8192),
            MemoryUsageMB(unix_time_ms=T0 + 5000, used=4200, free=8000),
        ),
    )


@pytest.fixture
def sample_payload() -> dict:
    """Wire form of ``sample_series``."""
    return {
        "cpuLoadPercentages": [
            {"unixTimeMs": T0, "user": 25.5, "system": 10.3},
            {"unixTimeMs": T0 + 5000, "user": 30.2, "system": 12.1},
        ],
        "memoryUsageMBs": [
            {"unixTimeMs": T0, "used": 4096, "free": 8192},
            {"unixTimeMs": T0 + 5000, "used": 4200, "free": 8000},
        ],
    }
