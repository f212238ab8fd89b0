from pydantic import AliasChoices, Field

from shared.config import BaseServiceConfig

DEFAULT_INTERVAL_MS = 5_000


def parse_interval_ms(raw: str | None, default_ms: int = DEFAULT_INTERVAL_MS) -> int:
    """Turn an interval in whole seconds into milliseconds.

    Absent, non-integer, zero or negative input falls back to ``default_ms``;
    this never raises.
    """
    if raw is None:
        return default_ms
    try:
        seconds = int(str(raw).strip())
    except ValueError:
        return default_ms
    if seconds <= 0:
        return default_ms
    return seconds * 1000


class Settings(BaseServiceConfig):
    # Sampling
    metrics_interval_seconds: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "metrics_interval_seconds",
            "input_interval_seconds",  # GitHub Actions `interval_seconds` input
        ),
    )
    default_interval_ms: int = DEFAULT_INTERVAL_MS

    # Launcher
    sampler_python_executable: str | None = None

    otel_service_name: str = "metrics-sampler"

    @property
    def interval_ms(self) -> int:
        return parse_interval_ms(
            self.metrics_interval_seconds, self.default_interval_ms
        )


settings = Settings()
