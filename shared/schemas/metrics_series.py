"""Snapshot schema shared by the sampler transport and the report client.

The wire format uses camelCase field names (``unixTimeMs``,
``cpuLoadPercentages``, ...); Python code uses the snake_case attribute
names. Both are accepted on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

BYTES_PER_MB = 1024 * 1024


class MalformedSnapshotError(ValueError):
    """Raised when a snapshot payload fails schema validation."""


class _Sample(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    unix_time_ms: int = Field(..., alias="unixTimeMs", description="Epoch-ms")


class CpuLoadPercentage(_Sample):
    user: float = Field(..., ge=0, le=100, description="User CPU load (%)")
    system: float = Field(..., ge=0, le=100, description="System CPU load (%)")


class MemoryUsageMB(_Sample):
    used: float = Field(..., ge=0, description="Active memory (MB)")
    free: float = Field(..., ge=0, description="Available memory (MB)")

    @classmethod
    def from_bytes(
        cls, unix_time_ms: int, active_bytes: float, available_bytes: float
    ) -> "MemoryUsageMB":
        return cls(
            unix_time_ms=unix_time_ms,
            used=active_bytes / BYTES_PER_MB,
            free=available_bytes / BYTES_PER_MB,
        )


class MetricsSeries(BaseModel):
    """CPU and memory samples accumulated over one run, oldest first."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cpu_load_percentages: tuple[CpuLoadPercentage, ...] = Field(
        ..., alias="cpuLoadPercentages"
    )
    memory_usage_mbs: tuple[MemoryUsageMB, ...] = Field(..., alias="memoryUsageMBs")

    @classmethod
    def empty(cls) -> "MetricsSeries":
        return cls(cpu_load_percentages=(), memory_usage_mbs=())

    def is_empty(self) -> bool:
        return not self.cpu_load_percentages and not self.memory_usage_mbs

    def to_json_dict(self) -> dict[str, Any]:
        """Wire representation with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def parse_metrics_series(payload: Any) -> MetricsSeries:
    """Validate a decoded JSON payload into a MetricsSeries.

    Raises:
        MalformedSnapshotError: the payload does not match the schema.
    """
    try:
        return MetricsSeries.model_validate(payload)
    except ValidationError as e:
        raise MalformedSnapshotError(
            f"Invalid metrics snapshot: {e.error_count()} validation error(s)"
        ) from e


def parse_metrics_series_json(text: str | bytes) -> MetricsSeries:
    """Decode and validate a raw JSON document (e.g. a saved artifact)."""
    try:
        return MetricsSeries.model_validate_json(text)
    except ValidationError as e:
        raise MalformedSnapshotError(
            f"Invalid metrics snapshot: {e.error_count()} validation error(s)"
        ) from e
