"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (BUILDLESS__SECTION__KEY)
3. YAML config (explicit path, else ~/.config/buildless/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    BUILDLESS__<SECTION>__<KEY>=<VALUE>

Examples:
    BUILDLESS__CACHE__TRANSPORT=resp
    BUILDLESS__CACHE__API_KEY=...
    BUILDLESS__CACHE__USE_AGENT=false
    BUILDLESS__LOGGING__LEVEL=DEBUG
"""

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TransportKind(StrEnum):
    """Cache transport selection."""

    AUTO = "auto"
    HTTP_OBJECT_STORE = "https"
    RESP_KEY_VALUE = "resp"
    PLATFORM_NATIVE = "gha"

    def resolved(self) -> "TransportKind":
        """Concrete transport for this selection (AUTO picks the object store)."""
        if self is TransportKind.AUTO:
            return TransportKind.HTTP_OBJECT_STORE
        return self


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        BUILDLESS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every cache request.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CacheConfig(BaseModel):
    """Cache backend selection.

    Env vars:
        BUILDLESS__CACHE__USE_AGENT: Use the local agent when present (default: true)
        BUILDLESS__CACHE__TRANSPORT: auto, https, resp or gha
        BUILDLESS__CACHE__ENDPOINT: Explicit endpoint URL, overrides agent and global
        BUILDLESS__CACHE__API_KEY: Buildless API key
        BUILDLESS__CACHE__TIMEOUT_SEC: Network timeout for the produced client
    """

    use_agent: bool | None = Field(
        default=None,
        description="Use the local agent when its rendezvous files exist. Unset means enabled.",
    )
    transport: TransportKind = Field(
        default=TransportKind.AUTO,
        description="Cache transport. 'auto' currently selects the HTTPS object store.",
    )
    endpoint: str | None = Field(
        default=None,
        description="Explicit endpoint. For 'resp' this may be a full redis:// or rediss:// URI.",
    )
    api_key: str | None = Field(
        default=None,
        repr=False,
        description="API key. Characters needing URL escaping must be pre-escaped.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="Network timeout applied to the produced client.",
    )

    @field_validator("endpoint", "api_key")
    @classmethod
    def blank_is_unset(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class BuildlessConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
