"""Slice a metrics series into per-step sub-series by time window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

from shared.schemas.metrics_series import MetricsSeries

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timestamped(Protocol):
    @property
    def unix_time_ms(self) -> int: ...


S = TypeVar("S", bound=Timestamped)


def parse_iso_ms(value: Optional[str]) -> Optional[int]:
    """ISO-8601 timestamp to epoch milliseconds; None stays None.

    Naive timestamps are taken as UTC.
    """
    if value is None or value == "":
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


class TimeWindow(BaseModel):
    """A named time range; a missing bound is unbounded on that side."""

    model_config = ConfigDict(frozen=True)

    name: str
    start_inclusive_ms: Optional[int] = None
    end_inclusive_ms: Optional[int] = None

    @classmethod
    def from_iso(
        cls, name: str, started_at: Optional[str], completed_at: Optional[str]
    ) -> "TimeWindow":
        return cls(
            name=name,
            start_inclusive_ms=parse_iso_ms(started_at),
            end_inclusive_ms=parse_iso_ms(completed_at),
        )

    @property
    def unbounded(self) -> bool:
        return self.start_inclusive_ms is None and self.end_inclusive_ms is None

    def contains(self, unix_time_ms: int) -> bool:
        return (
            self.start_inclusive_ms is None or self.start_inclusive_ms <= unix_time_ms
        ) and (self.end_inclusive_ms is None or unix_time_ms <= self.end_inclusive_ms)


class StepSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    series: MetricsSeries


def _within(samples: Sequence[S], window: TimeWindow) -> tuple[S, ...]:
    return tuple(s for s in samples if window.contains(s.unix_time_ms))


def filter_series(series: MetricsSeries, window: TimeWindow) -> MetricsSeries:
    """Samples of both series whose timestamp lies inside ``window``.

    A window with ``start > end`` simply matches nothing.
    """
    if window.unbounded:
        return series
    return MetricsSeries(
        cpu_load_percentages=_within(series.cpu_load_percentages, window),
        memory_usage_mbs=_within(series.memory_usage_mbs, window),
    )


def correlate(
    series: MetricsSeries, windows: Iterable[TimeWindow]
) -> list[StepSeries]:
    """One sub-series per window, in window order.

    Windows that match no samples are kept; dropping them is left to the
    renderer, which skips charts without data.
    """
    return [
        StepSeries(name=window.name, series=filter_series(series, window))
        for window in windows
    ]
