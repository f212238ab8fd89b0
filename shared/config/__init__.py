"""Shared configuration base classes.

Provides the settings common to the sampler service and the report step so
both sides agree on where the sampler listens and how logs are shaped.
"""

from pydantic_settings import BaseSettings

from shared.constants.endpoints import Endpoints


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "authorization",
        "cookie",
    ]
    app_environment: str = "ci"


class BaseServerConfig(BaseSettings):
    """Address of the sampler's HTTP transport."""

    metrics_server_host: str = Endpoints.DEFAULT_HOST
    metrics_server_port: int = Endpoints.DEFAULT_PORT

    @property
    def metrics_base_url(self) -> str:
        return Endpoints.base_url(self.metrics_server_host, self.metrics_server_port)


class BaseServiceConfig(BaseLoggingConfig, BaseServerConfig):
    """Base configuration combining logging and server settings.

    Packages inherit from this and add their own settings. The
    otel_service_name should be overridden by each package.
    """

    otel_service_name: str = "unknown"


__all__ = ["BaseLoggingConfig", "BaseServerConfig", "BaseServiceConfig"]
