"""Build the CPU and memory chart groups for a run and its steps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from metrics_report.correlation.steps import StepSeries

from shared.schemas.metrics_series import CpuLoadPercentage, MemoryUsageMB, MetricsSeries

from .models import NamedSeries, RenderGroup, YAxis

CPU_TITLE = "CPU Loads"
MEMORY_TITLE = "Memory Usages"

CPU_Y_AXIS = YAxis(title="%", range="0 --> 100")
MEMORY_Y_AXIS = YAxis(title="MB")


def _times(samples: Sequence[CpuLoadPercentage] | Sequence[MemoryUsageMB]):
    return tuple(
        datetime.fromtimestamp(s.unix_time_ms / 1000, tz=timezone.utc) for s in samples
    )


def cpu_group(
    samples: Sequence[CpuLoadPercentage], step_name: Optional[str] = None
) -> RenderGroup:
    return RenderGroup(
        title=CPU_TITLE,
        series=(
            NamedSeries(color="Orange", name="System", data=tuple(s.system for s in samples)),
            NamedSeries(color="Red", name="User", data=tuple(s.user for s in samples)),
        ),
        times=_times(samples),
        y_axis=CPU_Y_AXIS,
        step_name=step_name,
    )


def memory_group(
    samples: Sequence[MemoryUsageMB], step_name: Optional[str] = None
) -> RenderGroup:
    return RenderGroup(
        title=MEMORY_TITLE,
        series=(
            NamedSeries(color="Green", name="Free", data=tuple(s.free for s in samples)),
            NamedSeries(color="Blue", name="Used", data=tuple(s.used for s in samples)),
        ),
        times=_times(samples),
        y_axis=MEMORY_Y_AXIS,
        step_name=step_name,
    )


def build_render_groups(
    series: MetricsSeries, steps: Sequence[StepSeries] = ()
) -> list[RenderGroup]:
    """CPU charts (whole run, then each step) followed by memory charts."""
    scopes: list[tuple[Optional[str], MetricsSeries]] = [(None, series)]
    scopes.extend((step.name, step.series) for step in steps)
    return [
        *(cpu_group(s.cpu_load_percentages, name) for name, s in scopes),
        *(memory_group(s.memory_usage_mbs, name) for name, s in scopes),
    ]
