from metrics_sampler.core.config import settings
from metrics_sampler.core.logger import configure_logging, get_logger

logger = get_logger("sampler.startup")


def initialize_application():
    configure_logging()
    logger.info(
        "sampler_service_initializing",
        extra={
            "service": settings.otel_service_name,
            "interval_ms": settings.interval_ms,
            "host": settings.metrics_server_host,
            "port": settings.metrics_server_port,
        },
    )
