"""Config module exports."""

from buildless.config.constants import WELL_KNOWN, AgentPaths, WellKnown
from buildless.config.loader import load_config
from buildless.config.models import (
    BuildlessConfig,
    CacheConfig,
    LoggingConfig,
    TransportKind,
)

__all__ = [
    "load_config",
    "AgentPaths",
    "BuildlessConfig",
    "CacheConfig",
    "LoggingConfig",
    "TransportKind",
    "WELL_KNOWN",
    "WellKnown",
]
