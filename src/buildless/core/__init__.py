"""Core module exports."""

from buildless.core.errors import (
    BackendError,
    BuildlessError,
    ConfigError,
    ErrorCode,
    PlatformError,
    TransportError,
)
from buildless.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "BackendError",
    "BuildlessError",
    "ConfigError",
    "ErrorCode",
    "PlatformError",
    "TransportError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
