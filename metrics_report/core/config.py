from datetime import datetime, timezone

from pydantic import AliasChoices, Field

from shared.config import BaseServiceConfig
from shared.constants.endpoints import Endpoints


class Settings(BaseServiceConfig):
    # Snapshot fetch
    metrics_fetch_timeout_seconds: float = 10.0
    metrics_fetch_retries: int = 3
    metrics_fetch_base_delay_seconds: float = 1.0
    metrics_snapshot_path: str | None = None  # saved as a build artifact
    metrics_stop_sampler: bool = True

    # GitHub context, used for step correlation
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "input_github_token"),
    )
    github_api_url: str = "https://api.github.com"
    github_repository: str | None = None
    github_run_id: str | None = None
    github_run_attempt: str = "1"
    github_job: str | None = None
    runner_name: str | None = None
    github_step_summary: str | None = None

    otel_service_name: str = "metrics-report"

    @property
    def snapshot_url(self) -> str:
        return Endpoints.url(
            Endpoints.SNAPSHOT, self.metrics_server_host, self.metrics_server_port
        )

    @property
    def shutdown_url(self) -> str:
        return Endpoints.url(
            Endpoints.SHUTDOWN, self.metrics_server_host, self.metrics_server_port
        )

    @property
    def has_github_context(self) -> bool:
        return bool(self.github_token and self.github_repository and self.github_run_id)

    @property
    def report_id(self) -> str:
        if self.github_run_id:
            return f"{self.github_run_id}-{self.github_run_attempt}"
        return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


settings = Settings()
