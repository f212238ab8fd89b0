from shared.metrics import get_counter, get_gauge, get_histogram

SERVICE = "metrics_sampler"

SAMPLES_COLLECTED_TOTAL = get_counter(
    "samples_collected_total", "Collections that appended a CPU and memory sample.", SERVICE
)
COLLECTION_ERRORS_TOTAL = get_counter(
    "collection_errors_total", "Collections skipped because a collector failed.", SERVICE
)
COLLECTION_LATENCY_SECONDS = get_histogram(
    "collection_latency_seconds",
    "Time spent awaiting the CPU and memory collectors.",
    SERVICE,
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)
SERIES_LENGTH = get_gauge(
    "series_length", "Number of samples held in each series.", SERVICE
)
