import asyncio
import time
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from metrics_sampler.collection.providers import CpuLoad, MemoryUsage
from metrics_sampler.collection.sampler import Sampler

T0 = 1704067200000
GIB = 1024 * 1024 * 1024


class FakeClock:
    def __init__(self, start: int = T0):
        self.now = start

    def __call__(self) -> int:
        return self.now


class FakeProviders:
    """CPU/memory collectors that can be made slow or failing."""

    def __init__(self, clock: FakeClock | None = None, cost_ms: int = 0):
        self.clock = clock
        self.cost_ms = cost_ms
        self.fail_on: set[int] = set()
        self.calls = 0

    async def cpu(self) -> CpuLoad:
        self.calls += 1
        if self.clock is not None:
            self.clock.now += self.cost_ms
        if self.calls in self.fail_on:
            raise RuntimeError(f"cpu read {self.calls} failed")
        return CpuLoad(user_percent=25.5, system_percent=10.3)

    async def memory(self) -> MemoryUsage:
        return MemoryUsage(active_bytes=4 * GIB, available_bytes=8 * GIB)


class StopAfter:
    """Sleep stand-in that advances the fake clock and stops the loop."""

    def __init__(self, clock: FakeClock, ticks: int):
        self.clock = clock
        self.ticks = ticks
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.clock.now += round(seconds * 1000)
        if len(self.delays) >= self.ticks:
            raise asyncio.CancelledError


def _timestamps(sampler: Sampler) -> list[int]:
    return [s.unix_time_ms for s in sampler.get().cpu_load_percentages]


def _make(clock, providers, sleep, interval_ms=1000, errors=None):
    kwargs = {}
    if errors is not None:
        kwargs["on_error"] = lambda t, e: errors.append((t, e))
    return Sampler(
        interval_ms=interval_ms,
        cpu_provider=providers.cpu,
        memory_provider=providers.memory,
        clock_ms=clock,
        sleep=sleep,
        **kwargs,
    )


class TestCollect:
    """Single collections."""

    @pytest.mark.asyncio
    async def test_collect_appends_cpu_and_memory_samples(self):
        providers = FakeProviders()
        sampler = Sampler(cpu_provider=providers.cpu, memory_provider=providers.memory)

        assert await sampler.collect(T0) is True

        snapshot = sampler.get()
        assert len(snapshot.cpu_load_percentages) == 1
        cpu = snapshot.cpu_load_percentages[0]
        assert (cpu.unix_time_ms, cpu.user, cpu.system) == (T0, 25.5, 10.3)

    @pytest.mark.asyncio
    async def test_memory_bytes_converted_to_megabytes(self):
        providers = FakeProviders()
        sampler = Sampler(cpu_provider=providers.cpu, memory_provider=providers.memory)

        await sampler.collect(T0)

        memory = sampler.get().memory_usage_mbs[0]
        assert memory.unix_time_ms == T0
        assert memory.used == 4096
        assert memory.free == 8192

    @pytest.mark.asyncio
    async def test_failed_collection_is_reported_and_skipped(self):
        providers = FakeProviders()
        providers.fail_on = {1}
        errors = []
        sampler = Sampler(
            cpu_provider=providers.cpu,
            memory_provider=providers.memory,
            on_error=lambda t, e: errors.append((t, e)),
        )

        assert await sampler.collect(T0) is False

        assert sampler.get().is_empty()
        assert errors[0][0] == T0
        assert isinstance(errors[0][1], RuntimeError)

    @pytest.mark.asyncio
    async def test_out_of_range_reading_counts_as_failure(self):
        async def bad_cpu():
            return CpuLoad(user_percent=180.0, system_percent=0.0)

        errors = []
        sampler = Sampler(
            cpu_provider=bad_cpu,
            memory_provider=FakeProviders().memory,
            on_error=lambda t, e: errors.append(e),
        )

        assert await sampler.collect(T0) is False
        assert isinstance(errors[0], ValidationError)
        assert sampler.get().memory_usage_mbs == ()

    @pytest.mark.asyncio
    async def test_failing_error_reporter_does_not_escape(self):
        providers = FakeProviders()
        providers.fail_on = {1}

        def broken_reporter(target, exc):
            raise RuntimeError("reporter down")

        sampler = Sampler(
            cpu_provider=providers.cpu,
            memory_provider=providers.memory,
            on_error=broken_reporter,
        )

        assert await sampler.collect(T0) is False

    @pytest.mark.asyncio
    async def test_each_collection_reads_both_collectors_once(self):
        cpu = AsyncMock(return_value=CpuLoad(user_percent=1.0, system_percent=2.0))
        memory = AsyncMock(return_value=MemoryUsage(active_bytes=GIB, available_bytes=GIB))
        sampler = Sampler(cpu_provider=cpu, memory_provider=memory)

        await sampler.collect(T0)
        await sampler.collect(T0 + 5000)

        assert cpu.await_count == 2
        assert memory.await_count == 2
        assert sampler.sample_count == 2

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            Sampler(interval_ms=0)


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_snapshot_cannot_mutate_sampler_state(self):
        providers = FakeProviders()
        sampler = Sampler(cpu_provider=providers.cpu, memory_provider=providers.memory)
        await sampler.collect(T0)

        snapshot = sampler.get()

        assert isinstance(snapshot.cpu_load_percentages, tuple)
        with pytest.raises(ValidationError):
            snapshot.cpu_load_percentages[0].user = 99  # type: ignore[misc]
        with pytest.raises(ValidationError):
            snapshot.memory_usage_mbs = ()  # type: ignore[misc]

    @pytest.mark.asyncio
    async def test_snapshot_is_point_in_time(self):
        providers = FakeProviders()
        sampler = Sampler(cpu_provider=providers.cpu, memory_provider=providers.memory)
        await sampler.collect(T0)
        before = sampler.get()

        await sampler.collect(T0 + 5000)

        assert len(before.cpu_load_percentages) == 1
        assert len(sampler.get().cpu_load_percentages) == 2

    def test_new_sampler_is_empty(self):
        sampler = Sampler()

        assert sampler.get().is_empty()
        assert sampler.sample_count == 0
        assert not sampler.running


class TestScheduling:
    """Drift-corrected schedule, driven by a fake clock."""

    @pytest.mark.asyncio
    async def test_timestamps_follow_fixed_interval(self):
        clock = FakeClock()
        providers = FakeProviders(clock)
        sleep = StopAfter(clock, ticks=5)
        sampler = _make(clock, providers, sleep, interval_ms=1000)

        with pytest.raises(asyncio.CancelledError):
            await sampler.run(T0)

        assert _timestamps(sampler) == [T0 + i * 1000 for i in range(5)]
        assert sleep.delays == [1.0] * 5

    @pytest.mark.asyncio
    async def test_slow_collectors_do_not_accumulate_drift(self):
        clock = FakeClock()
        providers = FakeProviders(clock, cost_ms=300)
        sleep = StopAfter(clock, ticks=4)
        sampler = _make(clock, providers, sleep, interval_ms=1000)

        with pytest.raises(asyncio.CancelledError):
            await sampler.run(T0)

        # Each wait is shortened by the time the collection took.
        assert sleep.delays == [0.7] * 4
        assert _timestamps(sampler) == [T0, T0 + 1000, T0 + 2000, T0 + 3000]
        assert clock.now == T0 + 4000

    @pytest.mark.asyncio
    async def test_overrunning_collectors_keep_timestamps_increasing(self):
        clock = FakeClock()
        providers = FakeProviders(clock, cost_ms=2500)
        sleep = StopAfter(clock, ticks=4)
        sampler = _make(clock, providers, sleep, interval_ms=1000)

        with pytest.raises(asyncio.CancelledError):
            await sampler.run(T0)

        timestamps = _timestamps(sampler)
        assert sleep.delays == [0.0] * 4
        assert timestamps == [T0, T0 + 1000, T0 + 2000, T0 + 3000]
        assert all(b > a for a, b in zip(timestamps, timestamps[1:]))

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_the_schedule(self):
        clock = FakeClock()
        providers = FakeProviders(clock)
        providers.fail_on = {2, 3}
        sleep = StopAfter(clock, ticks=5)
        errors = []
        sampler = _make(clock, providers, sleep, interval_ms=1000, errors=errors)

        with pytest.raises(asyncio.CancelledError):
            await sampler.run(T0)

        assert [t for t, _ in errors] == [T0 + 1000, T0 + 2000]
        assert _timestamps(sampler) == [T0, T0 + 3000, T0 + 4000]
        assert len(sampler.get().memory_usage_mbs) == 3

    @pytest.mark.asyncio
    async def test_start_and_stop_in_real_time(self):
        providers = FakeProviders()
        sampler = Sampler(
            interval_ms=100, cpu_provider=providers.cpu, memory_provider=providers.memory
        )
        started_ms = time.time_ns() // 1_000_000

        sampler.start()
        assert sampler.start() is sampler.start()  # idempotent while running
        await asyncio.sleep(0.35)
        await sampler.stop()

        timestamps = _timestamps(sampler)
        assert not sampler.running
        assert 3 <= len(timestamps) <= 5
        assert abs(timestamps[0] - started_ms) <= 200
        assert all(b - a == 100 for a, b in zip(timestamps, timestamps[1:]))

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self):
        sampler = Sampler()

        await sampler.stop()

        assert not sampler.running
