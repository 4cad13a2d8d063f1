"""Buildless error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Platform
- 4xxx: Transport
- 5xxx: Backend
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Platform (3xxx)
    PLATFORM_UNSUPPORTED = 3001

    # Transport (4xxx)
    TRANSPORT_NOT_IMPLEMENTED = 4001

    # Backend (5xxx)
    BACKEND_BUILD_FAILED = 5001


@dataclass(frozen=True, slots=True)
class BuildlessError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PLATFORM_UNSUPPORTED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(BuildlessError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class PlatformError(BuildlessError):
    """Host platform cannot run the cache client."""

    @classmethod
    def unsupported(cls, platform: str) -> "PlatformError":
        return cls(
            code=ErrorCode.PLATFORM_UNSUPPORTED,
            message=(
                f"Buildless caching is only supported on macOS, Linux, and Windows "
                f"(got '{platform}')"
            ),
            details={"platform": platform},
        )


class TransportError(BuildlessError):
    """Requested transport has no implementation."""

    @classmethod
    def not_implemented(cls, transport: str) -> "TransportError":
        return cls(
            code=ErrorCode.TRANSPORT_NOT_IMPLEMENTED,
            message=f"Transport '{transport}' is not implemented yet for Buildless caching",
            details={"transport": transport},
        )


class BackendError(BuildlessError):
    """Cache client construction failed."""

    @classmethod
    def build_failed(cls, transport: str, endpoint: str, reason: str) -> "BackendError":
        return cls(
            code=ErrorCode.BACKEND_BUILD_FAILED,
            message=f"Failed to build '{transport}' cache backend for {endpoint}: {reason}",
            details={"transport": transport, "endpoint": endpoint, "reason": reason},
        )

