"""Periodic CPU/memory sampler with drift-corrected scheduling."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional

from metrics_sampler.core.config import DEFAULT_INTERVAL_MS
from metrics_sampler.core.logger import get_logger

from shared.schemas.metrics_series import CpuLoadPercentage, MemoryUsageMB, MetricsSeries

from .metrics import (
    COLLECTION_ERRORS_TOTAL,
    COLLECTION_LATENCY_SECONDS,
    SAMPLES_COLLECTED_TOTAL,
    SERIES_LENGTH,
)
from .providers import CpuLoad, MemoryUsage, get_cpu_load, get_memory_usage

logger = get_logger("sampler.collection")

CpuProvider = Callable[[], Awaitable[CpuLoad]]
MemoryProvider = Callable[[], Awaitable[MemoryUsage]]
ErrorReporter = Callable[[int, BaseException], None]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def report_collection_failure(target_time_ms: int, exc: BaseException) -> None:
    COLLECTION_ERRORS_TOTAL.inc()
    logger.warning(
        "metrics_collection_failed",
        exc_info=exc,
        extra={"target_time_ms": target_time_ms, "error": str(exc)},
    )


class Sampler:
    """Owns the CPU and memory series for the lifetime of the process.

    Collections are anchored to a fixed timeline: the n-th collection targets
    ``origin + n * interval_ms`` no matter how long earlier collections took,
    and that target time becomes the sample timestamp. A failed collection is
    reported through ``on_error`` and skipped; the schedule keeps going.

    The series are only mutated between awaits, so a reader calling ``get()``
    from the same event loop never observes a half-appended collection.
    """

    def __init__(
        self,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        cpu_provider: CpuProvider = get_cpu_load,
        memory_provider: MemoryProvider = get_memory_usage,
        on_error: ErrorReporter = report_collection_failure,
        clock_ms: Callable[[], int] = now_ms,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._cpu_provider = cpu_provider
        self._memory_provider = memory_provider
        self._on_error = on_error
        self._clock_ms = clock_ms
        self._sleep = sleep
        self._cpu: list[CpuLoadPercentage] = []
        self._memory: list[MemoryUsageMB] = []
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def sample_count(self) -> int:
        return len(self._cpu)

    def start(self) -> asyncio.Task[None]:
        """Schedule the first collection at "now" and keep collecting.

        Must be called from inside a running event loop. Calling it again
        while the sampler is running returns the existing task.
        """
        if self._task is not None and not self._task.done():
            return self._task
        origin_ms = self._clock_ms()
        self._task = asyncio.create_task(self.run(origin_ms), name="metrics-sampler")
        logger.info(
            "sampler_started",
            extra={"origin_ms": origin_ms, "interval_ms": self._interval_ms},
        )
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            logger.debug("sampler_task_cancelled")
        finally:
            self._task = None
        logger.info("sampler_stopped", extra={"samples": self.sample_count})

    async def run(self, origin_ms: int) -> None:
        tick = 0
        while True:
            await self.collect(origin_ms + tick * self._interval_ms)
            tick += 1
            next_target_ms = origin_ms + tick * self._interval_ms
            delay_ms = max(0, next_target_ms - self._clock_ms())
            await self._sleep(delay_ms / 1000)

    async def collect(self, target_time_ms: int) -> bool:
        """Take one CPU and one memory reading stamped with ``target_time_ms``.

        Returns True when both samples were appended.
        """
        started = time.perf_counter()
        try:
            cpu = await self._cpu_provider()
            memory = await self._memory_provider()
            cpu_sample = CpuLoadPercentage(
                unix_time_ms=target_time_ms,
                user=cpu.user_percent,
                system=cpu.system_percent,
            )
            memory_sample = MemoryUsageMB.from_bytes(
                target_time_ms, memory.active_bytes, memory.available_bytes
            )
        except Exception as exc:
            self._report(target_time_ms, exc)
            return False
        finally:
            COLLECTION_LATENCY_SECONDS.observe(time.perf_counter() - started)

        # No await between the two appends.
        self._cpu.append(cpu_sample)
        self._memory.append(memory_sample)
        SAMPLES_COLLECTED_TOTAL.inc()
        SERIES_LENGTH.set(len(self._cpu))
        return True

    def get(self) -> MetricsSeries:
        """Immutable snapshot of everything collected so far."""
        return MetricsSeries(
            cpu_load_percentages=tuple(self._cpu),
            memory_usage_mbs=tuple(self._memory),
        )

    def _report(self, target_time_ms: int, exc: BaseException) -> None:
        try:
            self._on_error(target_time_ms, exc)
        except Exception:
            logger.exception(
                "collection_error_reporter_failed",
                extra={"target_time_ms": target_time_ms},
            )
