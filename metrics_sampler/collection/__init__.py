from .providers import CpuLoad, MemoryUsage, get_cpu_load, get_memory_usage
from .sampler import Sampler

__all__ = ["CpuLoad", "MemoryUsage", "Sampler", "get_cpu_load", "get_memory_usage"]
