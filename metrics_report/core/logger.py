from __future__ import annotations

import logging

from shared.logging.json import RedactingFilter
from shared.logging.json import configure_logging as _shared_configure_logging

from .config import settings

_configured = False


def configure_logging():
    global _configured
    if _configured:
        return
    _shared_configure_logging(
        service=settings.otel_service_name,
        level=settings.app_log_level,
        environment=settings.app_environment,
        redaction_patterns=settings.app_log_redaction_patterns,
    )
    # Attach redaction filter at root so it applies to all handlers
    root = logging.getLogger()
    for h in root.handlers:
        h.addFilter(RedactingFilter(settings.app_log_redaction_patterns))
    # requests retries are logged by the client itself
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
