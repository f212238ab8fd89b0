"""Shared utilities and components for the sampler and report packages."""

from .config import BaseLoggingConfig, BaseServerConfig, BaseServiceConfig
from .constants import Environment, Endpoints

__all__ = [
    "Environment",
    "Endpoints",
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseServerConfig",
]
