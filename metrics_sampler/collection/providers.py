"""Instantaneous CPU and memory readings backed by psutil.

The readings are taken on a worker thread so the event loop stays free to
answer snapshot requests while psutil reads /proc.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class CpuLoad:
    user_percent: float
    system_percent: float


@dataclass(frozen=True)
class MemoryUsage:
    active_bytes: int
    available_bytes: int


def read_cpu_load() -> CpuLoad:
    times = psutil.cpu_times_percent(interval=None)
    return CpuLoad(user_percent=float(times.user), system_percent=float(times.system))


def read_memory_usage() -> MemoryUsage:
    vm = psutil.virtual_memory()
    # `active` is not reported on every platform (e.g. Windows)
    active = getattr(vm, "active", None)
    if active is None:
        active = vm.used
    return MemoryUsage(active_bytes=int(active), available_bytes=int(vm.available))


async def get_cpu_load() -> CpuLoad:
    return await asyncio.to_thread(read_cpu_load)


async def get_memory_usage() -> MemoryUsage:
    return await asyncio.to_thread(read_memory_usage)


# First call only establishes the baseline for the next delta.
psutil.cpu_times_percent(interval=None)
